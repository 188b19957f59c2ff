"""
Admin views for LTI registration models.
"""
from django.contrib import admin

from lti_registration.models import PendingRegistration, Platform, ToolKey


class PlatformAdmin(admin.ModelAdmin):
    """
    Admin view for Platform models.

    The platform identity and key are read-only: they were issued during
    the registration and can't be changed without registering again.
    """
    list_display = ('tool_name', 'name', 'url', 'client_id', 'created')
    search_fields = ('url', 'client_id', 'tool_name')
    readonly_fields = ('url', 'client_id', 'kid', 'created')


class PendingRegistrationAdmin(admin.ModelAdmin):
    list_display = ('configuration_endpoint', 'modified')
    exclude = ('registration_token',)


class ToolKeyAdmin(admin.ModelAdmin):
    """
    Admin view for ToolKey models. The private key is never displayed.
    """
    list_display = ('kid', 'created')
    exclude = ('private_key',)
    readonly_fields = ('kid', 'public_jwk', 'created')


admin.site.register(Platform, PlatformAdmin)
admin.site.register(PendingRegistration, PendingRegistrationAdmin)
admin.site.register(ToolKey, ToolKeyAdmin)
