"""
Tests for the LTI 1.3 Dynamic Registration endpoint views.
"""
from unittest.mock import patch

import ddt
import responses
from django.test.testcases import TestCase
from django.urls import reverse

from lti_registration.models import PendingRegistration, Platform
from lti_registration.tests.utils import (
    CLIENT_ID,
    CONFIGURATION_ENDPOINT,
    PLATFORM_ISSUER,
    REGISTRATION_ENDPOINT,
    make_openid_configuration,
    make_registration_response,
)


@ddt.ddt
class TestRegistrationEndpoint(TestCase):
    """
    Test `registration_endpoint` view.
    """
    def setUp(self):
        super().setUp()
        self.url = '/registration'

    def test_url(self):
        self.assertEqual(reverse('lti_registration:registration'), self.url)

    def test_registration(self):
        """
        Test that the registration is stored and the tool name form is returned.
        """
        response = self.client.get(self.url, {'openid_configuration': CONFIGURATION_ENDPOINT})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/html; charset=utf-8')
        self.assertContains(response, 'action="/continue-registration"')
        self.assertContains(response, f'name="endpoint" value="{CONFIGURATION_ENDPOINT}"')
        self.assertContains(response, 'name="tool_name"')
        self.assertEqual(PendingRegistration.objects.get_token(CONFIGURATION_ENDPOINT), '')

    def test_registration_with_token(self):
        response = self.client.get(
            self.url,
            {'openid_configuration': CONFIGURATION_ENDPOINT, 'registration_token': 'token'},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(PendingRegistration.objects.get_token(CONFIGURATION_ENDPOINT), 'token')

    def test_framing_allowed(self):
        response = self.client.get(self.url, {'openid_configuration': CONFIGURATION_ENDPOINT})

        self.assertNotIn('X-Frame-Options', response)

    def test_endpoint_is_escaped(self):
        """
        Test that the configuration endpoint can't inject markup into the form.
        """
        endpoint = 'https://lms.example/cfg?a="><script>alert(1)</script>'

        response = self.client.get(self.url, {'openid_configuration': endpoint})

        self.assertEqual(response.status_code, 200)
        self.assertNotContains(response, '<script>alert(1)</script>')

    def test_registration_host_without_domain(self):
        endpoint = 'http://moodle:8080/mod/lti/openid-configuration.php'

        response = self.client.get(self.url, {'openid_configuration': endpoint})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(PendingRegistration.objects.get_token(endpoint), '')

    @ddt.data(
        {},
        {'openid_configuration': ''},
        {'openid_configuration': 'not a url'},
        {'openid_configuration': 'ftp://lms.example/cfg'},
    )
    def test_invalid_parameters(self, params):
        response = self.client.get(self.url, params)

        self.assertEqual(response.status_code, 400)
        self.assertFalse(PendingRegistration.objects.exists())

    def test_invalid_method(self):
        response = self.client.post(self.url, {'openid_configuration': CONFIGURATION_ENDPOINT})

        self.assertEqual(response.status_code, 405)

    @patch('lti_registration.plugin.views.start_registration', side_effect=RuntimeError('database is down'))
    def test_unexpected_error(self, mock_start_registration):  # pylint: disable=unused-argument
        """
        Test that unexpected errors answer a generic 500 without internal details.
        """
        response = self.client.get(self.url, {'openid_configuration': CONFIGURATION_ENDPOINT})

        self.assertEqual(response.status_code, 500)
        self.assertNotContains(response, 'database is down', status_code=500)


@ddt.ddt
class TestContinueRegistrationEndpoint(TestCase):
    """
    Test `continue_registration_endpoint` view.
    """
    def setUp(self):
        super().setUp()
        self.url = '/continue-registration'
        self.client.get('/registration', {
            'openid_configuration': CONFIGURATION_ENDPOINT,
            'registration_token': 'token',
        })

    def _mock_platform(self):
        responses.add(responses.GET, CONFIGURATION_ENDPOINT, json=make_openid_configuration())
        responses.add(responses.POST, REGISTRATION_ENDPOINT, json=make_registration_response())

    def _post(self, endpoint=CONFIGURATION_ENDPOINT, tool_name='My tool'):
        return self.client.post(self.url, {'endpoint': endpoint, 'tool_name': tool_name})

    def test_url(self):
        self.assertEqual(reverse('lti_registration:continue_registration'), self.url)

    @responses.activate
    def test_continue_registration(self):
        """
        Test that the platform is recorded and the close message is posted to the platform window.
        """
        self._mock_platform()

        response = self._post()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/html; charset=utf-8')
        self.assertContains(response, 'org.imsglobal.lti.close')
        self.assertContains(response, 'window.opener || window.parent')
        self.assertNotIn('X-Frame-Options', response)

        platform = Platform.objects.get(url=PLATFORM_ISSUER, client_id=CLIENT_ID)
        self.assertEqual(platform.tool_name, 'My tool')

    def test_registration_not_started(self):
        response = self._post(endpoint='https://other.example/.well-known/cfg')

        self.assertContains(response, 'Registration not started.', status_code=400)

    @ddt.data({}, {'endpoint': CONFIGURATION_ENDPOINT}, {'tool_name': 'My tool'}, {'endpoint': 'x', 'tool_name': 'y'})
    def test_invalid_parameters(self, data):
        response = self.client.post(self.url, data)

        self.assertEqual(response.status_code, 400)
        self.assertTrue(PendingRegistration.objects.exists_for(CONFIGURATION_ENDPOINT))

    @responses.activate
    def test_duplicate_registration(self):
        """
        Test that registering the same platform and client id twice answers a conflict.
        """
        self._mock_platform()
        self._post()
        self.client.get('/registration', {'openid_configuration': CONFIGURATION_ENDPOINT})

        response = self._post(tool_name='Another tool')

        self.assertContains(response, 'Platform already registered.', status_code=409)
        self.assertEqual(Platform.objects.count(), 1)
        self.assertEqual(Platform.objects.get().tool_name, 'My tool')

    @ddt.data(404, 500)
    @responses.activate
    def test_configuration_fetch_failure(self, status):
        """
        Test that a platform failure answers 500 and leaves the registration consumed.
        """
        responses.add(responses.GET, CONFIGURATION_ENDPOINT, json={}, status=status)

        response = self._post()

        self.assertEqual(response.status_code, 500)
        self.assertFalse(PendingRegistration.objects.exists())
        self.assertFalse(Platform.objects.exists())

    @responses.activate
    def test_retry_after_failure(self):
        responses.add(responses.GET, CONFIGURATION_ENDPOINT, json={}, status=500)
        self._post()

        response = self._post()

        self.assertEqual(response.status_code, 400)

    @responses.activate
    def test_retry_after_success(self):
        self._mock_platform()
        self._post()

        response = self._post()

        self.assertContains(response, 'Registration not started.', status_code=400)

    def test_csrf_exempt(self):
        client = self.client_class(enforce_csrf_checks=True)

        response = client.post(self.url, {'endpoint': 'https://other.example/.well-known/cfg', 'tool_name': 'x'})

        self.assertEqual(response.status_code, 400)

    def test_invalid_method(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 405)

    @patch('lti_registration.plugin.views.complete_registration', side_effect=KeyError('secret'))
    def test_unexpected_error(self, mock_complete_registration):  # pylint: disable=unused-argument
        response = self._post()

        self.assertContains(response, 'Something went wrong.', status_code=500)
        self.assertNotContains(response, 'secret', status_code=500)
