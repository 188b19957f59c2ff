"""
LTI 1.3 Dynamic Registration views
"""
import logging

from django.shortcuts import render
from django.views.decorators.clickjacking import xframe_options_exempt
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from lti_registration.api import complete_registration, start_registration
from lti_registration.exceptions import InternalError, LtiRegistrationError

log = logging.getLogger(__name__)


def _render_error(request, error):
    return render(
        request,
        'html/registration_error.html',
        context={"error_msg": error.message},
        status=error.status_code,
    )


@require_http_methods(["GET"])
@xframe_options_exempt
def registration_endpoint(request):
    """
    Registration initiation endpoint.

    The platform opens this page with the URL of its OpenID configuration
    and, optionally, a registration token. The registration is stored as
    pending and a form asking for the tool name is returned.

    Query Parameters:
    * openid_configuration (REQUIRED): URL of the platform's OpenID configuration
    * registration_token (OPTIONAL): token authorizing the client registration request
    """
    try:
        continuation = start_registration(
            request.GET.get('openid_configuration'),
            request.GET.get('registration_token'),
        )
    except LtiRegistrationError as exc:
        log.info("Unable to start LTI registration: %s", exc)
        return _render_error(request, exc)
    except Exception:  # pylint: disable=broad-except
        log.exception("Unexpected error while starting LTI registration.")
        return _render_error(request, InternalError())

    return render(
        request,
        'html/registration_form.html',
        context={"continuation": continuation},
    )


@require_http_methods(["POST"])
@xframe_options_exempt
@csrf_exempt
def continue_registration_endpoint(request):
    """
    Registration completion endpoint.

    Registers the tool with the platform and returns a page that tells the
    platform window the registration is over.

    Form Parameters:
    * endpoint (REQUIRED): URL of the platform's OpenID configuration, as sent to the registration endpoint
    * tool_name (REQUIRED): name given to the tool on this platform
    """
    try:
        completion = complete_registration(
            request.POST.get('endpoint'),
            request.POST.get('tool_name'),
        )
    except LtiRegistrationError as exc:
        log.warning("LTI registration failed: %s", exc)
        return _render_error(request, exc)
    except Exception:  # pylint: disable=broad-except
        log.exception("Unexpected error while completing LTI registration.")
        return _render_error(request, InternalError())

    return render(
        request,
        'html/registration_complete.html',
        context={"completion": completion},
    )
