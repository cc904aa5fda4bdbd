
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

"""This module contains the ClientBase class and its helper objects.

The client negotiates the authentication scheme with the server: it starts
without credentials and, when the server rejects a request, escalates to
Http digest authentication (on Http 401) or to a WS-Security UsernameToken
header (on a NotAuthorized fault), retrying the request once per escalation.
The negotiated mode sticks to the client for all later calls.

A client that's still negotiating must not be shared between threads without
care: state transitions are serialized by a lock, but concurrent calls made
before the mode settles may each pay for their own failed first attempt.
Make one call first, or pass the known ``auth_mode`` to the constructor.
"""

import logging
logger = logging.getLogger(__name__)

from io import BytesIO
from threading import Lock

import onvifsoap.const

from onvifsoap._base import AUTH_MODE_NONE
from onvifsoap._base import AUTH_MODE_DIGEST
from onvifsoap._base import AUTH_MODE_WS_SECURITY
from onvifsoap._base import AUTH_MODE_RANK
from onvifsoap.const.http import HTTP_STATUS_UNAUTHORIZED
from onvifsoap.error import HttpStatusError
from onvifsoap.error import SoapDecodeError
from onvifsoap.error import UnauthorizedError
from onvifsoap.model.envelope import Body
from onvifsoap.model.envelope import Envelope
from onvifsoap.model.envelope import Header
from onvifsoap.model.security import new_security
from onvifsoap.protocol.soap import Soap12
from onvifsoap.protocol.soap import to_payload
from onvifsoap.util.logtools import log_exchange
from onvifsoap.util.logtools import REQUEST
from onvifsoap.util.logtools import RESPONSE


class Request(object):
    """A Soap request.

    :param url: The endpoint address.
    :param namespaces: Namespace bindings to declare on the envelope, of the
        form ``{prefix: uri}``. They must cover every prefix the body uses.
    :param body: The body payload. Either already serialized xml as ``bytes``
        or ``str``, or an lxml element.
    """

    def __init__(self, url, namespaces=None, body=b''):
        self.url = url
        self.namespaces = namespaces or {}
        self.body = body


class HttpResponse(object):
    """What a transport returns for a request, whatever the status code.

    :param status: The Http status code, as an int.
    :param stream: A file-like object with the response body, or the body
        itself as bytes.
    :param headers: The response headers. Either a dict or an
        :class:`email.message.Message`.
    :param reason: The Http reason phrase.
    """

    def __init__(self, status, stream, headers=None, reason=None):
        if isinstance(stream, bytes):
            stream = BytesIO(stream)

        self.status = status
        self.stream = stream
        self.headers = headers if headers is not None else {}
        self.reason = reason

    def get_header(self, name, default=None):
        if hasattr(self.headers, 'get_all'):
            return self.headers.get(name, default)

        name = name.lower()
        for k, v in self.headers.items():
            if k.lower() == name:
                return v

        return default

    def read(self):
        return self.stream.read()

    def rebuffer(self):
        """Reads the whole body and replaces the stream with an in-memory
        copy, so that it can still be read afterwards."""

        data = self.stream.read()
        self.stream = BytesIO(data)
        return data


class TransportBase(object):
    """Abstract base class of the Http transports the client sends requests
    through. Connection management, TLS, timeouts and retries are the
    transport's business."""

    def post(self, url, data, content_type):
        """Posts ``data`` to ``url`` and returns a :class:`HttpResponse`.
        Http error statuses must be returned, not raised.

        :raises onvifsoap.error.TransportError: The request could not be
            delivered.
        """

        raise NotImplementedError()

    def install_digest_auth(self, url, username, password, challenge=None):
        """Makes every later request authenticate with Http digest
        authentication.

        :param challenge: The ``WWW-Authenticate`` header value of the 401
            response that triggered the installation, if any. The transport
            may answer it directly on the next request to ``url``.
        """

        raise NotImplementedError()


class ClientBase(object):
    """The base class for all clients. It's bound to a transport, which child
    classes usually create in their constructor.

    :param transport: A :class:`TransportBase` instance.
    :param username: The user name. Credentials are used only when both the
        user name and the password are set.
    :param password: The password.
    :param auth_mode: The auth mode to start with. Defaults to
        :data:`onvifsoap._base.AUTH_MODE_NONE`.
    :param debug: When ``True``, the serialized requests and the raw
        responses are passed to ``dump``.
    :param dump: A callable taking a direction string and the data bytes.
        Defaults to :func:`onvifsoap.util.logtools.log_exchange`.
    """

    MAX_ATTEMPTS = 3
    """One first attempt plus one retry per escalation path."""

    def __init__(self, transport, username=None, password=None,
                      auth_mode=AUTH_MODE_NONE, debug=False, dump=None):
        if not (auth_mode in AUTH_MODE_RANK):
            raise ValueError("unknown auth mode: %r" % (auth_mode,))

        self.transport = transport
        self.username = username
        self.password = password
        self.debug = debug
        self.dump = dump if dump is not None else log_exchange
        self.protocol = Soap12()

        self.__lock = Lock()
        self.__auth_mode = auth_mode
        self.__digest_installed = False

        if auth_mode == AUTH_MODE_DIGEST and self.has_credentials():
            self.transport.install_digest_auth(None, username, password)
            self.__digest_installed = True

    @property
    def auth_mode(self):
        return self.__auth_mode

    def has_credentials(self):
        return bool(self.username) and bool(self.password)

    def do(self, request):
        """Sends the request and returns the response envelope, whose body
        can be further unmarshaled with
        :meth:`onvifsoap.model.envelope.Body.unmarshal`.

        :raises onvifsoap.error.UnauthorizedError: The server rejected the
            request and the auth mode can't be escalated any further.
        :raises onvifsoap.model.fault.Fault: The server returned any other
            fault.
        """

        payload = to_payload(request.body)

        digest_retried = False
        ws_security_retried = False

        for _ in range(self.MAX_ATTEMPTS):
            auth_mode = self.__auth_mode

            out_string = self.get_out_string(request, payload, auth_mode)
            response = self.transport.post(request.url, out_string,
                                                   onvifsoap.const.MIME_TYPE)

            if response.status == HTTP_STATUS_UNAUTHORIZED:
                error = HttpStatusError(response.status, response.reason)
                if digest_retried or not self.escalate_to_digest(auth_mode,
                                                          request.url, response):
                    raise UnauthorizedError(error)

                digest_retried = True
                continue

            envelope = self.get_in_object(response)

            fault = envelope.body.fault
            if fault is None:
                return envelope

            if not fault.is_unauthorized():
                raise fault

            if ws_security_retried or \
                                  not self.escalate_to_ws_security(auth_mode):
                raise UnauthorizedError(fault)

            ws_security_retried = True

        raise RuntimeError("auth mode negotiation did not settle in %d "
                                               "attempts" % self.MAX_ATTEMPTS)

    def get_out_string(self, request, payload, auth_mode):
        """Serializes the request envelope. A new security header is built
        for every call in WS-Security mode."""

        header = None
        if auth_mode == AUTH_MODE_WS_SECURITY and self.has_credentials():
            header = Header(security=new_security(self.username,
                                                                self.password))

        envelope = Envelope(namespaces=request.namespaces, header=header,
                                                        body=Body(payload))

        out_string = self.protocol.encode(envelope)

        if self.debug:
            self.dump(REQUEST, out_string)

        return out_string

    def get_in_object(self, response):
        """Decodes the response body into an envelope."""

        if self.debug:
            self.dump(RESPONSE, response.rebuffer())

        in_string = response.read()

        try:
            return self.protocol.decode(in_string)

        except SoapDecodeError as e:
            if not (200 <= response.status < 300):
                raise HttpStatusError(response.status, response.reason) from e
            raise

    def escalate_to_digest(self, auth_mode, url, response):
        """Switches to Http digest authentication after a 401 received in
        ``auth_mode``. Returns ``False`` when that's not possible."""

        if auth_mode == AUTH_MODE_DIGEST or not self.has_credentials():
            return False

        with self.__lock:
            if AUTH_MODE_RANK[self.__auth_mode] < \
                                              AUTH_MODE_RANK[AUTH_MODE_DIGEST]:
                logger.debug("Http 401 in %r mode, switching to %r mode.",
                                                  auth_mode, AUTH_MODE_DIGEST)
                self.__auth_mode = AUTH_MODE_DIGEST

            if not self.__digest_installed:
                challenge = response.get_header('WWW-Authenticate')
                self.transport.install_digest_auth(url, self.username,
                                                     self.password, challenge)
                self.__digest_installed = True

        return True

    def escalate_to_ws_security(self, auth_mode):
        """Switches to WS-Security UsernameToken authentication after a
        NotAuthorized fault received in ``auth_mode``. Returns ``False`` when
        that's not possible."""

        if auth_mode != AUTH_MODE_NONE or not self.has_credentials():
            return False

        with self.__lock:
            if self.__auth_mode == AUTH_MODE_NONE:
                logger.debug("NotAuthorized fault in %r mode, switching to %r "
                                        "mode.", auth_mode, AUTH_MODE_WS_SECURITY)
                self.__auth_mode = AUTH_MODE_WS_SECURITY

        return True
