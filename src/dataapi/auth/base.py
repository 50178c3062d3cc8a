"""
Authenticator interface.

The request executor depends only on this interface: anything that can put
authorization material on an outgoing request can back a service.
"""

from abc import ABC, abstractmethod

from requests import PreparedRequest
from requests.auth import AuthBase


class Authenticator(AuthBase, ABC):
    """Attaches authorization material to outgoing requests.

    Subclasses keep network I/O out of their constructors; :meth:`authenticate`
    is the explicit step that talks to the provider. Instances are also
    ``requests`` auth objects, so ``requests.get(url, auth=authenticator)``
    works.
    """

    scheme = "abstract"

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """Whether :meth:`sign_request` can be called."""

    @abstractmethod
    def authenticate(self) -> None:
        """Obtain or verify the credentials used for signing."""

    @abstractmethod
    def sign_request(self, request: PreparedRequest) -> PreparedRequest:
        """Add authorization headers to ``request`` in place and return it."""

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        return self.sign_request(request)
