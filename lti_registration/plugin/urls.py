"""
URL mappings for the LTI 1.3 Dynamic Registration endpoints.
"""
from django.urls import path

from lti_registration.plugin.views import continue_registration_endpoint, registration_endpoint

app_name = 'lti_registration'
urlpatterns = [
    path(
        'registration',
        registration_endpoint,
        name='registration'
    ),
    path(
        'continue-registration',
        continue_registration_endpoint,
        name='continue_registration'
    ),
]
