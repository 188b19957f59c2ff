"""
Python APIs used to handle the LTI 1.3 Dynamic Registration flow.

Registration happens in two phases. The platform opens the tool's
registration page, which stores a pending registration and asks for
a tool name (`start_registration`). The submitted form completes the
registration with the platform and records it (`complete_registration`).
"""
import logging

from edx_django_utils.monitoring import function_trace, set_custom_attribute

from lti_registration.data import RegistrationCompletion, RegistrationContinuation, ToolConfiguration
from lti_registration.exceptions import DuplicateRegistrationError, ValidationError
from lti_registration.lti_1p3.constants import LTI_1P3_AUTH_METHOD_JWK_SET
from lti_registration.lti_1p3.registration import (
    build_client_registration_request,
    fetch_platform_configuration,
    register_tool,
)
from lti_registration.models import PendingRegistration, Platform, ToolKey
from lti_registration.serializers import RegistrationContinueSerializer, RegistrationStartSerializer
from lti_registration.utils import (
    get_registration_http_timeout,
    get_tool_client_name,
    get_tool_custom_parameters,
    get_tool_deep_link_url,
    get_tool_description,
    get_tool_domain,
    get_tool_key_size,
    get_tool_keyset_url,
    get_tool_launch_url,
    get_tool_login_url,
    get_tool_logo_uri,
)

log = logging.getLogger(__name__)


def _validate(serializer_class, data):
    """
    Validate data with a serializer, raising ValidationError with the field errors if invalid.
    """
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        fields = ", ".join(sorted(serializer.errors))
        raise ValidationError(f"Invalid or missing parameters: {fields}.", errors=serializer.errors)
    return serializer.validated_data


def get_tool_configuration():
    """
    Return the tool's endpoints and display information sent to platforms.
    """
    return ToolConfiguration(
        launch_url=get_tool_launch_url(),
        deep_link_url=get_tool_deep_link_url(),
        login_url=get_tool_login_url(),
        keys_url=get_tool_keyset_url(),
        domain=get_tool_domain(),
        client_name=get_tool_client_name(),
        logo_uri=get_tool_logo_uri(),
        description=get_tool_description(),
        custom_parameters=get_tool_custom_parameters(),
    )


def start_registration(configuration_endpoint, registration_token=None):
    """
    Start a registration for the platform whose OpenID configuration is at configuration_endpoint.

    Starting a registration again for the same endpoint replaces the stored token.

    Returns a RegistrationContinuation, from which the tool name form is rendered.
    """
    data = {'openid_configuration': configuration_endpoint}
    if registration_token is not None:
        data['registration_token'] = registration_token
    validated_data = _validate(RegistrationStartSerializer, data)

    configuration_endpoint = validated_data['openid_configuration']
    PendingRegistration.objects.set_token(
        configuration_endpoint,
        validated_data.get('registration_token', ''),
    )
    log.info("LTI registration started for %s", configuration_endpoint)

    return RegistrationContinuation(configuration_endpoint=configuration_endpoint)


@function_trace('lti_registration.api.complete_registration')
def complete_registration(configuration_endpoint, tool_name):
    """
    Complete the registration started for configuration_endpoint.

    The pending registration is consumed before the platform is contacted,
    so a failed attempt must be started again from the platform.

    Returns a RegistrationCompletion holding the new Platform.
    """
    validated_data = _validate(
        RegistrationContinueSerializer,
        {'endpoint': configuration_endpoint, 'tool_name': tool_name},
    )
    configuration_endpoint = validated_data['endpoint']
    tool_name = validated_data['tool_name']

    registration_token = PendingRegistration.objects.consume(configuration_endpoint)

    timeout = get_registration_http_timeout()
    configuration = fetch_platform_configuration(configuration_endpoint, timeout=timeout)
    set_custom_attribute('lti_registration.platform_issuer', configuration.issuer)

    registration_request = build_client_registration_request(configuration, get_tool_configuration())
    client_id = register_tool(
        configuration.registration_endpoint,
        registration_request,
        registration_token=registration_token,
        timeout=timeout,
    )

    kid = ToolKey.objects.generate(key_size=get_tool_key_size())

    # The client registered above is left on the platform side, it has to be removed there by hand.
    if Platform.objects.exists_for(configuration.issuer, client_id):
        log.warning(
            "LTI platform %s is already registered with client_id %s, the new registration was not saved.",
            configuration.issuer,
            client_id,
        )
        raise DuplicateRegistrationError()

    platform = Platform.objects.add(
        url=configuration.issuer,
        client_id=client_id,
        name=configuration.product_family_code,
        tool_name=tool_name,
        authentication_endpoint=configuration.authorization_endpoint,
        access_token_endpoint=configuration.token_endpoint,
        auth_config={
            'method': LTI_1P3_AUTH_METHOD_JWK_SET,
            'key': configuration.jwks_uri,
        },
        kid=kid,
    )
    log.info("New LTI platform registered: %s", platform)

    return RegistrationCompletion(platform=platform)


def get_platform(url, client_id):
    """
    Return the Platform registered for the issuer url and client_id, or None.
    """
    return Platform.objects.get_platform(url, client_id)


def get_tool_key(kid):
    """
    Return the ToolKey with the given kid, or None.
    """
    return ToolKey.objects.filter(kid=kid).first()
