"""
lti_registration Django application initialization.
"""

from django.apps import AppConfig


class LtiRegistrationApp(AppConfig):
    """
    Configuration for the lti_registration Django application.
    """

    name = 'lti_registration'
    verbose_name = 'LTI 1.3 Dynamic Registration'
    default_auto_field = 'django.db.models.AutoField'
