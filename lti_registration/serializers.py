"""
Serializers validating the parameters of the registration endpoints
"""
from urllib.parse import urlparse

from rest_framework import serializers


class AbsoluteURLField(serializers.CharField):
    """
    Serializer field for an absolute http(s) URL.

    Unlike `serializers.URLField`, hosts without a top level domain
    (e.g. `http://moodle:8080/`) are accepted: platforms are often
    reached by container or intranet host names.
    """
    default_error_messages = {
        'invalid': 'Enter an absolute http or https URL.',
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            parsed = urlparse(value)
            # Raises ValueError on an invalid port
            parsed.port  # pylint: disable=pointless-statement
        except ValueError as err:
            raise serializers.ValidationError(self.error_messages['invalid'], code='invalid') from err
        if parsed.scheme not in ('http', 'https') or not parsed.hostname:
            self.fail('invalid')
        return value


class RegistrationStartSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Parameters sent by the platform when it opens the registration page.

    Reference:
    https://www.imsglobal.org/spec/lti-dr/v1p0#step-1-registration-initiation-request
    """
    openid_configuration = AbsoluteURLField(max_length=2048)
    registration_token = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class RegistrationContinueSerializer(serializers.Serializer):  # pylint: disable=abstract-method
    """
    Parameters of the form submitted once the tool name is entered.
    """
    endpoint = AbsoluteURLField(max_length=2048)
    tool_name = serializers.CharField(max_length=255)
