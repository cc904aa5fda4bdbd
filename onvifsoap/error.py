
#
# onvifsoap - Copyright (C) onvifsoap contributors.
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.
#
# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301
#

"""The ``onvifsoap.error`` module contains the exceptions raised by the
envelope codec and the client.

Soap faults returned by the remote end are raised as
:class:`onvifsoap.model.fault.Fault` instances, which also derive from
:class:`OnvifSoapError`.
"""

from onvifsoap.const.http import status_line


class OnvifSoapError(Exception):
    """Base class for every error raised by onvifsoap."""


class TransportError(OnvifSoapError):
    """Raised when the request could not be delivered or the response could
    not be read. Never retried by the client."""


class HttpStatusError(TransportError):
    """Raised when the server answered with an Http error status and a body
    that is not a Soap envelope."""

    def __init__(self, status, reason=None):
        self.status = status
        self.reason = reason

        super(HttpStatusError, self).__init__(status_line(status, reason))


class MarshalError(OnvifSoapError):
    """Raised when the outgoing envelope or its payload can't be
    serialized."""


class UnmarshalError(OnvifSoapError):
    """Raised when the body payload can't be deserialized."""


class NoResponseError(UnmarshalError):
    """Raised when the body of a response envelope has no content."""

    def __init__(self, msg="server did not return a response"):
        super(NoResponseError, self).__init__(msg)


class SoapDecodeError(OnvifSoapError):
    """Raised when the incoming document is not a valid Soap envelope."""


class XmlSyntaxError(SoapDecodeError):
    """Raised when the incoming document is not well-formed xml."""


class UnexpectedElementError(SoapDecodeError):
    """Raised when an element other than Header or Body is found where either
    is expected."""

    def __init__(self, tag):
        self.tag = tag

        super(UnexpectedElementError, self).__init__(
                                               "unexpected element: %s" % tag)


class UnexpectedTokenError(SoapDecodeError):
    """Raised when non-whitespace character data is found between the
    envelope elements."""

    def __init__(self, token):
        self.token = token

        super(UnexpectedTokenError, self).__init__(
                                               "unexpected token: %r" % token)


class MissingBodyError(SoapDecodeError):
    """Raised when the envelope has no Body element."""

    def __init__(self, msg="envelope has no Body element"):
        super(MissingBodyError, self).__init__(msg)


class SecurityError(OnvifSoapError):
    """Raised when a security header can't be built."""


class UnresolvedNamespacesError(OnvifSoapError):
    """Raised when a fault is classified before its namespace table was
    populated."""

    def __init__(self, msg="fault namespace table is not populated"):
        super(UnresolvedNamespacesError, self).__init__(msg)


class UnauthorizedError(OnvifSoapError):
    """Raised when the server rejects the supplied credentials, or requires
    credentials and none are configured.

    :param error: Either a :class:`HttpStatusError` for an Http 401 response or
        the :class:`onvifsoap.model.fault.Fault` that was classified as an
        authorization failure.
    """

    def __init__(self, error):
        self.error = error

        super(UnauthorizedError, self).__init__("unauthorized: %s" % (error,))
