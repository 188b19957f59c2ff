"""
LTI 1.3 Dynamic Registration models.
"""
import logging

from django.db import IntegrityError, models, transaction
from django.utils.translation import gettext_lazy as _

from lti_registration.exceptions import DuplicateRegistrationError, RegistrationNotStartedError
from lti_registration.lti_1p3.constants import LTI_1P3_AUTH_METHOD_JWK_SET
from lti_registration.lti_1p3.key_handlers import ToolKeyHandler, generate_key_pair
from lti_registration.utils import url_digest

log = logging.getLogger(__name__)


class PendingRegistrationManager(models.Manager):
    """
    Keyed store of registrations started by a platform and not yet completed.
    """

    def get_token(self, configuration_endpoint):
        """
        Return the registration token stored for an endpoint, or None if
        no registration was started for it.
        """
        return self.filter(
            endpoint_hash=url_digest(configuration_endpoint),
        ).values_list('registration_token', flat=True).first()

    def set_token(self, configuration_endpoint, registration_token):
        """
        Store a registration token, replacing any token previously stored
        for the same endpoint.
        """
        pending, __ = self.update_or_create(
            endpoint_hash=url_digest(configuration_endpoint),
            defaults={
                'configuration_endpoint': configuration_endpoint,
                'registration_token': registration_token or '',
            },
        )
        return pending

    def exists_for(self, configuration_endpoint):
        return self.filter(endpoint_hash=url_digest(configuration_endpoint)).exists()

    def delete_for(self, configuration_endpoint):
        deleted, __ = self.filter(endpoint_hash=url_digest(configuration_endpoint)).delete()
        return bool(deleted)

    def consume(self, configuration_endpoint):
        """
        Read and delete the pending registration for an endpoint.

        A pending registration can only be consumed once: when two callers
        race for the same endpoint, only the one whose delete removed the
        row gets the token.
        """
        registration_token = self.get_token(configuration_endpoint)
        if registration_token is None or not self.delete_for(configuration_endpoint):
            raise RegistrationNotStartedError()
        return registration_token


class PendingRegistration(models.Model):
    """
    A registration started by a platform, waiting for the tool name to be entered.

    .. no_pii:
    """
    configuration_endpoint = models.CharField(
        max_length=2048,
        help_text=_("URL of the platform's OpenID configuration."),
    )
    endpoint_hash = models.CharField(
        max_length=64,
        unique=True,
        editable=False,
        help_text=_("SHA-256 digest of the configuration endpoint, used as the lookup key."),
    )
    registration_token = models.TextField(
        blank=True,
        help_text=_("Bearer token used to authorize the client registration request."),
    )
    modified = models.DateTimeField(auto_now=True)

    objects = PendingRegistrationManager()

    def save(self, *args, **kwargs):
        self.endpoint_hash = url_digest(self.configuration_endpoint)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"[PendingRegistration] {self.configuration_endpoint}"


class PlatformManager(models.Manager):
    """
    Keyed store of registered platforms, identified by (url, client_id).
    """

    def get_platform(self, url, client_id):
        return self.filter(url_hash=url_digest(url), client_id=client_id).first()

    def exists_for(self, url, client_id):
        return self.filter(url_hash=url_digest(url), client_id=client_id).exists()

    def add(self, **fields):
        """
        Insert a platform only if none exists with the same url and client_id.

        The unique constraint makes the insert conditional, so a platform
        registered concurrently is reported instead of being overwritten.
        """
        try:
            with transaction.atomic():
                return self.create(**fields)
        except IntegrityError as err:
            log.warning(
                "Platform %s with client_id %s was registered concurrently.",
                fields.get("url"),
                fields.get("client_id"),
            )
            raise DuplicateRegistrationError() from err


class Platform(models.Model):
    """
    A platform the tool is registered with.

    .. no_pii:
    """
    url = models.CharField(
        max_length=2048,
        help_text=_("Issuer identifier of the platform."),
    )
    url_hash = models.CharField(
        max_length=64,
        editable=False,
        help_text=_("SHA-256 digest of the issuer identifier, used as the lookup key."),
    )
    client_id = models.CharField(
        max_length=255,
        help_text=_("Client ID issued to the tool by the platform."),
    )
    name = models.CharField(
        max_length=255,
        help_text=_("Product family code of the platform."),
    )
    tool_name = models.CharField(
        max_length=255,
        help_text=_("Name given to the tool when it was registered."),
    )
    authentication_endpoint = models.CharField(
        max_length=2048,
        help_text=_("OIDC authorization endpoint of the platform."),
    )
    access_token_endpoint = models.CharField(
        max_length=2048,
        help_text=_("OAuth2 token endpoint of the platform."),
    )
    auth_config = models.JSONField(
        default=dict,
        help_text=_("How to retrieve the platform keys: a method and a key location."),
    )
    kid = models.CharField(
        max_length=255,
        help_text=_("ID of the tool key used with this platform."),
    )
    created = models.DateTimeField(auto_now_add=True)

    objects = PlatformManager()

    class Meta:
        unique_together = [['url_hash', 'client_id']]

    @property
    def auth_method(self):
        return self.auth_config.get('method', LTI_1P3_AUTH_METHOD_JWK_SET)

    @property
    def keyset_url(self):
        return self.auth_config.get('key')

    def save(self, *args, **kwargs):
        self.url_hash = url_digest(self.url)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"[Platform] {self.name} - {self.url} ({self.client_id})"


class ToolKeyManager(models.Manager):
    """
    Generates and stores the key pairs the tool signs its messages with.
    """

    def generate(self, key_size=2048):
        """
        Generate and store a new key pair, returning its kid.
        """
        kid, private_key = generate_key_pair(key_size)
        key_handler = ToolKeyHandler(key_pem=private_key, kid=kid)
        self.create(
            kid=kid,
            private_key=private_key,
            public_jwk=key_handler.get_public_jwk(),
        )
        return kid

    def public_jwks(self):
        """
        Return the public keys of every stored key pair as a keyset.
        """
        return {"keys": list(self.values_list('public_jwk', flat=True))}


class ToolKey(models.Model):
    """
    An RSA key pair generated for a platform registration.

    .. no_pii:
    """
    kid = models.CharField(max_length=255, unique=True)
    private_key = models.TextField(
        help_text=_("Tool's generated private key. Keep this value secret."),
    )
    public_jwk = models.JSONField(
        default=dict,
        help_text=_("Tool's generated public key, as a JWK."),
    )
    created = models.DateTimeField(auto_now_add=True)

    objects = ToolKeyManager()

    def __str__(self):
        return f"[ToolKey] {self.kid}"
