"""
Utility functions for the LTI 1.3 Dynamic Registration app
"""
import hashlib
from urllib.parse import urljoin, urlparse

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


DEFAULT_TOOL_CLIENT_NAME = 'LTI Tool'
DEFAULT_REGISTRATION_HTTP_TIMEOUT = 10
DEFAULT_TOOL_KEY_SIZE = 2048


def get_tool_base_url():
    """
    Returns the public base URL of the tool, used to build the
    launch, login and keyset URLs sent to platforms. For local
    testing it is often necessary to expose the tool through a
    proxy such as ngrok, use the setting LTI_TOOL_BASE_URL_OVERRIDE
    in that case.
    """
    if hasattr(settings, 'LTI_TOOL_BASE_URL_OVERRIDE'):
        return settings.LTI_TOOL_BASE_URL_OVERRIDE

    base_url = getattr(settings, 'LTI_TOOL_BASE_URL', None)
    if not base_url:
        raise ImproperlyConfigured("LTI_TOOL_BASE_URL must be set to the public URL of the tool.")
    return base_url


def get_tool_url(path):
    """
    Returns a tool URL resolved against the base URL.

    :param path: relative reference, resolved the way a browser would.
    """
    return urljoin(get_tool_base_url(), path)


def get_tool_launch_url():
    return get_tool_url('launch')


def get_tool_deep_link_url():
    return get_tool_url('deep-link-launch')


def get_tool_login_url():
    return get_tool_url('login')


def get_tool_keyset_url():
    return get_tool_url('keys')


def get_tool_domain():
    """
    Returns the host (and port, if any) the tool is served from.
    """
    return urlparse(get_tool_base_url()).netloc


def get_tool_client_name():
    return getattr(settings, 'LTI_TOOL_CLIENT_NAME', DEFAULT_TOOL_CLIENT_NAME)


def get_tool_logo_uri():
    return getattr(settings, 'LTI_TOOL_LOGO_URI', None)


def get_tool_description():
    return getattr(settings, 'LTI_TOOL_DESCRIPTION', '')


def get_tool_custom_parameters():
    """
    Returns the custom parameters sent in the tool configuration.

    A copy is returned so the caller can't alter the settings.
    """
    return dict(getattr(settings, 'LTI_TOOL_CUSTOM_PARAMETERS', {}))


def get_registration_http_timeout():
    """
    Returns the timeout, in seconds, of the calls made to the platform.
    None disables the timeout.
    """
    return getattr(settings, 'LTI_REGISTRATION_HTTP_TIMEOUT', DEFAULT_REGISTRATION_HTTP_TIMEOUT)


def get_tool_key_size():
    return getattr(settings, 'LTI_TOOL_KEY_SIZE', DEFAULT_TOOL_KEY_SIZE)


def url_digest(url):
    """
    Returns the hex SHA-256 digest of a URL.

    URLs may be up to 2048 characters long, too long to be indexed by
    some databases, so the stores are keyed on this digest instead.
    """
    return hashlib.sha256(url.encode('utf-8')).hexdigest()
