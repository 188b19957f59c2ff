"""
Utility functions and data used within unit tests
"""
import copy

from lti_registration.lti_1p3.constants import LTI_PLATFORM_CONFIGURATION_CLAIM

CONFIGURATION_ENDPOINT = 'https://lms.example/.well-known/cfg'
PLATFORM_ISSUER = 'https://lms.example'
REGISTRATION_ENDPOINT = 'https://lms.example/lti/register'
CLIENT_ID = 'abc123'

OPENID_CONFIGURATION = {
    "issuer": PLATFORM_ISSUER,
    "authorization_endpoint": "https://lms.example/lti/auth",
    "token_endpoint": "https://lms.example/lti/token",
    "jwks_uri": "https://lms.example/lti/certs",
    "registration_endpoint": REGISTRATION_ENDPOINT,
    "token_endpoint_auth_methods_supported": ["private_key_jwt"],
    "scopes_supported": ["openid"],
    "response_types_supported": ["id_token"],
    "claims_supported": ["sub", "iss", "name", "email"],
    LTI_PLATFORM_CONFIGURATION_CLAIM: {
        "product_family_code": "moodle",
        "version": "4.1",
    },
}


def make_openid_configuration(**overrides):
    """
    Helper to build a platform OpenID configuration document
    """
    document = copy.deepcopy(OPENID_CONFIGURATION)
    document.update(overrides)
    return document


def make_registration_response(client_id=CLIENT_ID):
    """
    Helper to build the platform answer to a client registration request
    """
    return {
        "client_id": client_id,
        "response_types": ["id_token"],
        "application_type": "web",
        "client_name": "Example LTI Tool",
    }
