"""
LTI 1.3 - Tool key handling

Generates the RSA key pair the tool signs its messages with
and exports the public half as a JWK for keyset publication.
"""
import json
import logging
import uuid

import jwt
from Cryptodome.PublicKey import RSA
from edx_django_utils.monitoring import function_trace
from jwt.api_jwk import PyJWK

from lti_registration.exceptions import KeyGenerationError

log = logging.getLogger(__name__)


@function_trace('lti_registration.key_handlers.generate_key_pair')
def generate_key_pair(key_size=2048):
    """
    Generate a new RSA key pair.

    Returns a tuple with a fresh key id and the PEM encoded private key.
    """
    try:
        private_key = RSA.generate(key_size)
    except ValueError as err:
        log.warning('Unable to generate a %s bit RSA key for the tool.', key_size)
        raise KeyGenerationError() from err

    return str(uuid.uuid4()), private_key.export_key('PEM').decode('utf-8')


class ToolKeyHandler:
    """
    Tool RSA Key handler.

    This class loads a tool private key and is responsible for
    exporting its public key.
    """
    def __init__(self, key_pem, kid=None):
        """
        Import the key when instancing the class.
        """
        try:
            algo = jwt.get_algorithm_by_name('RS256')
            private_key = algo.prepare_key(key_pem)
            private_jwk = json.loads(algo.to_jwk(private_key))
            private_jwk['kid'] = kid
            self.key = PyJWK.from_dict(private_jwk)
        except jwt.exceptions.InvalidKeyError as err:
            log.warning(
                'An error was encountered while loading the newly generated LTI tool key. '
                'The RSA key could not be imported.'
            )
            raise KeyGenerationError("The generated RSA key could not be loaded.") from err

    @property
    def kid(self):
        return self.key.key_id

    def get_public_jwk(self):
        """
        Export the public key as a JWK dictionary.
        """
        algo_obj = jwt.get_algorithm_by_name('RS256')
        public_key = algo_obj.prepare_key(self.key.key).public_key()
        public_jwk = json.loads(algo_obj.to_jwk(public_key))
        public_jwk['kid'] = self.key.key_id
        public_jwk['alg'] = 'RS256'
        public_jwk['use'] = 'sig'
        return public_jwk
