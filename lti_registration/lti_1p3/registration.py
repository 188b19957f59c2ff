"""
LTI 1.3 Dynamic Registration - platform client

Discovers a platform's OpenID configuration, builds the tool's
client registration request and submits it to the platform.

Reference:
https://www.imsglobal.org/spec/lti-dr/v1p0
"""
import logging

import requests
from rest_framework import serializers

from lti_registration.data import ClientRegistrationRequest, PlatformConfiguration
from lti_registration.exceptions import UpstreamError
from lti_registration.lti_1p3.constants import (
    LTI_1P3_REGISTRATION_SCOPES,
    LTI_DEEP_LINKING_REQUEST,
    LTI_PLATFORM_CONFIGURATION_CLAIM,
    LTI_RESOURCE_LINK_REQUEST,
)
from lti_registration.serializers import AbsoluteURLField

log = logging.getLogger(__name__)


class LtiMessageSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    type = serializers.CharField()


class LtiPlatformConfigurationSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    LTI extension block of the platform's OpenID configuration.

    {
        "product_family_code": "moodle",
        "version": "4.1",
        "messages_supported": [
            {"type": "LtiResourceLinkRequest"},
            {"type": "LtiDeepLinkingRequest"}
        ]
    }
    """
    product_family_code = serializers.CharField()
    messages_supported = LtiMessageSerializer(many=True, required=False)


class PlatformConfigurationSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Platform OpenID configuration.

    Only the fields needed to register the tool are validated, any
    other field in the document is ignored.

    Reference:
    https://www.imsglobal.org/spec/lti-dr/v1p0#platform-configuration
    """
    issuer = serializers.CharField()
    authorization_endpoint = AbsoluteURLField()
    token_endpoint = AbsoluteURLField()
    jwks_uri = AbsoluteURLField()
    registration_endpoint = AbsoluteURLField()
    claims_supported = serializers.ListField(child=serializers.CharField(), required=False)

    def get_fields(self):
        # The extension block is keyed by a URL, which can't be declared as an attribute
        # nor used as a source, since sources are split on dots.
        fields = super().get_fields()
        fields[LTI_PLATFORM_CONFIGURATION_CLAIM] = LtiPlatformConfigurationSerializer(
            source='lti_platform_configuration',
        )
        return fields

    def to_platform_configuration(self):
        """
        Return the validated document as a PlatformConfiguration.
        """
        data = self.validated_data
        lti_configuration = data['lti_platform_configuration']

        messages_supported = None
        if 'messages_supported' in lti_configuration:
            messages_supported = [message['type'] for message in lti_configuration['messages_supported']]

        return PlatformConfiguration(
            issuer=data['issuer'],
            authorization_endpoint=data['authorization_endpoint'],
            token_endpoint=data['token_endpoint'],
            jwks_uri=data['jwks_uri'],
            registration_endpoint=data['registration_endpoint'],
            product_family_code=lti_configuration['product_family_code'],
            claims_supported=list(data.get('claims_supported', [])),
            messages_supported=messages_supported,
        )


class ClientRegistrationResponseSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Platform answer to the client registration request.

    Only the client_id is needed, the echoed client metadata is ignored.
    """
    client_id = serializers.CharField()


def _request_json(method, url, timeout, **kwargs):
    """
    Send a request to the platform and return the decoded JSON body.

    Any network error, non-success status or non JSON body raises UpstreamError.
    """
    try:
        response = requests.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
    except requests.RequestException as err:
        log.warning("LTI registration request %s %s failed: %s", method, url, err)
        raise UpstreamError(f"The request to the platform at {url} failed.") from err

    try:
        return response.json()
    except ValueError as err:
        log.warning("LTI registration request %s %s returned a body that is not JSON.", method, url)
        raise UpstreamError(f"The platform at {url} returned an invalid response.") from err


def fetch_platform_configuration(configuration_endpoint, timeout=None):
    """
    Retrieve and parse the platform's OpenID configuration.

    Arguments:
        configuration_endpoint (str): URL of the OpenID configuration document
        timeout (float): seconds to wait for the platform, None to wait forever

    Returns:
        PlatformConfiguration
    """
    document = _request_json(
        'GET',
        configuration_endpoint,
        timeout,
        headers={'Accept': 'application/json'},
    )

    serializer = PlatformConfigurationSerializer(data=document)
    if not serializer.is_valid():
        log.warning(
            "Invalid OpenID configuration returned by %s: %s",
            configuration_endpoint,
            serializer.errors,
        )
        raise UpstreamError("The platform's OpenID configuration is not valid.")

    return serializer.to_platform_configuration()


def get_lti_messages(configuration, tool):
    """
    Return the LTI messages the tool asks the platform to send.

    The tool offers resource link launches and deep linking requests.
    When the platform advertises the messages it supports, the ones it
    doesn't are left out.
    """
    messages = [
        {"type": LTI_RESOURCE_LINK_REQUEST},
        {
            "type": LTI_DEEP_LINKING_REQUEST,
            "target_link_uri": tool.deep_link_url,
        },
    ]

    if configuration.messages_supported is None:
        return messages

    return [message for message in messages if message["type"] in configuration.messages_supported]


def build_client_registration_request(configuration, tool):
    """
    Build the client registration request for a platform.

    Arguments:
        configuration (PlatformConfiguration): the platform's discovered configuration
        tool (ToolConfiguration): the tool's endpoints and display information

    Returns:
        ClientRegistrationRequest
    """
    return ClientRegistrationRequest(
        redirect_uris=[tool.launch_url, tool.deep_link_url],
        initiate_login_uri=tool.login_url,
        jwks_uri=tool.keys_url,
        client_name=tool.client_name,
        logo_uri=tool.logo_uri,
        scope=" ".join(LTI_1P3_REGISTRATION_SCOPES),
        tool_configuration={
            "domain": tool.domain,
            "description": tool.description,
            "target_link_uri": tool.launch_url,
            "custom_parameters": tool.custom_parameters,
            "claims": list(configuration.claims_supported),
            "messages": get_lti_messages(configuration, tool),
        },
    )


def register_tool(registration_endpoint, registration_request, registration_token=None, timeout=None):
    """
    Submit the client registration request and return the client id issued by the platform.

    Arguments:
        registration_endpoint (str): the platform's registration endpoint
        registration_request (ClientRegistrationRequest): the tool metadata to register
        registration_token (str): bearer token handed out by the platform when it started the registration
        timeout (float): seconds to wait for the platform, None to wait forever
    """
    headers = {'Accept': 'application/json'}
    if registration_token:
        headers['Authorization'] = f'Bearer {registration_token}'

    document = _request_json(
        'POST',
        registration_endpoint,
        timeout,
        json=registration_request.to_dict(),
        headers=headers,
    )

    serializer = ClientRegistrationResponseSerializer(data=document)
    if not serializer.is_valid():
        log.warning(
            "Invalid client registration response returned by %s: %s",
            registration_endpoint,
            serializer.errors,
        )
        raise UpstreamError("The platform's client registration response is not valid.")

    return serializer.validated_data['client_id']
