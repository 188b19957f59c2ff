"""
LTI 1.3 Dynamic Registration constants

This includes the OAuth2 scopes requested by the tool, the LTI
extension keys used in the OpenID configuration and client
registration documents, and the message types the tool offers.
"""

# Scopes requested when registering, sent space separated.
# https://www.imsglobal.org/spec/lti-dr/v1p0#lti-configuration-0
LTI_1P3_REGISTRATION_SCOPES = [
    # LTI-AGS Scopes
    'https://purl.imsglobal.org/spec/lti-ags/scope/lineitem.readonly',
    'https://purl.imsglobal.org/spec/lti-ags/scope/lineitem',
    'https://purl.imsglobal.org/spec/lti-ags/scope/score',
    'https://purl.imsglobal.org/spec/lti-ags/scope/result.readonly',

    # LTI-NRPS Scopes
    'https://purl.imsglobal.org/spec/lti-nrps/scope/contextmembership.readonly',
]

# Extension block of the platform's OpenID configuration.
# https://www.imsglobal.org/spec/lti-dr/v1p0#lti-platform-configuration
LTI_PLATFORM_CONFIGURATION_CLAIM = 'https://purl.imsglobal.org/spec/lti-platform-configuration'

# Extension block of the tool's client registration request.
# https://www.imsglobal.org/spec/lti-dr/v1p0#lti-configuration-0
LTI_TOOL_CONFIGURATION_CLAIM = 'https://purl.imsglobal.org/spec/lti-tool-configuration'

LTI_RESOURCE_LINK_REQUEST = 'LtiResourceLinkRequest'
LTI_DEEP_LINKING_REQUEST = 'LtiDeepLinkingRequest'

# Fixed OAuth2 client metadata values for an LTI tool.
LTI_1P3_APPLICATION_TYPE = 'web'
LTI_1P3_GRANT_TYPES = ['implicit', 'client_credentials']
LTI_1P3_RESPONSE_TYPES = ['id_token']
LTI_1P3_TOKEN_ENDPOINT_AUTH_METHOD = 'private_key_jwt'

# Platform keys are retrieved from the platform's JWKS URL.
LTI_1P3_AUTH_METHOD_JWK_SET = 'JWK_SET'

# Message posted to the opener window once registration is done.
# https://www.imsglobal.org/spec/lti-dr/v1p0#step-4-registration-completed-and-activation
LTI_REGISTRATION_CLOSE_SUBJECT = 'org.imsglobal.lti.close'
