"""
This module provides the public data structures exchanged during an LTI 1.3 Dynamic Registration: the platform
metadata the tool discovers, the tool metadata it submits, and the results handed back to the caller to render.
"""

from attrs import asdict, define, field, validators

from lti_registration.lti_1p3.constants import (
    LTI_1P3_APPLICATION_TYPE,
    LTI_1P3_GRANT_TYPES,
    LTI_1P3_RESPONSE_TYPES,
    LTI_1P3_TOKEN_ENDPOINT_AUTH_METHOD,
    LTI_REGISTRATION_CLOSE_SUBJECT,
    LTI_TOOL_CONFIGURATION_CLAIM,
)

_string_list = validators.deep_iterable(
    member_validator=validators.instance_of(str),
    iterable_validator=validators.instance_of(list),
)


@define
class PlatformConfiguration:
    """
    The subset of a platform's OpenID configuration used to register the tool.

    * issuer: The platform's issuer identifier. Together with the client id it identifies a registered platform.
    * authorization_endpoint: The OIDC authorization endpoint the tool redirects to during launches.
    * token_endpoint: The OAuth2 token endpoint used to request LTI Advantage access tokens.
    * jwks_uri: The URL of the platform's public keyset.
    * registration_endpoint: The endpoint the client registration request is posted to.
    * product_family_code: The platform's product identity (e.g. "moodle", "canvas").
    * claims_supported: The claims the platform is able to include in its messages.
    * messages_supported (optional): The message types the platform is able to send. None when the platform does
        not advertise them.
    """
    issuer = field(validator=validators.instance_of(str))
    authorization_endpoint = field(validator=validators.instance_of(str))
    token_endpoint = field(validator=validators.instance_of(str))
    jwks_uri = field(validator=validators.instance_of(str))
    registration_endpoint = field(validator=validators.instance_of(str))
    product_family_code = field(validator=validators.instance_of(str))
    claims_supported = field(factory=list, validator=_string_list)
    messages_supported = field(default=None, validator=validators.optional(_string_list))


@define
class ToolConfiguration:
    """
    The tool's own endpoints and display information, derived from settings.
    """
    launch_url = field()
    deep_link_url = field()
    login_url = field()
    keys_url = field()
    domain = field()
    client_name = field()
    logo_uri = field(default=None)
    description = field(default="")
    custom_parameters = field(factory=dict)


@define
class ClientRegistrationRequest:
    """
    An OAuth2 dynamic client registration request extended with the LTI tool configuration block.

    The OAuth2 client metadata is fixed for LTI tools; redirect_uris always holds the launch URL followed by the deep
    linking URL.
    """
    redirect_uris = field(validator=_string_list)
    initiate_login_uri = field()
    jwks_uri = field()
    client_name = field()
    scope = field()
    tool_configuration = field(factory=dict)
    logo_uri = field(default=None)
    application_type = field(default=LTI_1P3_APPLICATION_TYPE)
    grant_types = field(factory=lambda: list(LTI_1P3_GRANT_TYPES))
    response_types = field(factory=lambda: list(LTI_1P3_RESPONSE_TYPES))
    token_endpoint_auth_method = field(default=LTI_1P3_TOKEN_ENDPOINT_AUTH_METHOD)

    def to_dict(self):
        """
        Return the JSON body posted to the platform's registration endpoint.
        """
        body = asdict(self, filter=lambda attribute, value: attribute.name != 'tool_configuration')
        if body['logo_uri'] is None:
            del body['logo_uri']
        body[LTI_TOOL_CONFIGURATION_CLAIM] = self.tool_configuration
        return body


@define
class RegistrationContinuation:
    """
    Result of starting a registration: the caller renders a form that posts the configuration endpoint and a tool
    name to the completion endpoint.
    """
    configuration_endpoint = field()


@define
class RegistrationCompletion:
    """
    Result of completing a registration: the caller renders a page that posts close_message to the window that
    opened the registration flow.
    """
    platform = field()
    close_message = field(factory=lambda: {"subject": LTI_REGISTRATION_CLOSE_SUBJECT})
