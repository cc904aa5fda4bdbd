
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

"""The HTTP (urllib) client transport."""

import socket

from http.client import HTTPException

from urllib.error import HTTPError, URLError
from urllib.parse import urlsplit
from urllib.request import Request, build_opener
from urllib.request import HTTPDigestAuthHandler
from urllib.request import HTTPPasswordMgrWithDefaultRealm

from onvifsoap.client._base import ClientBase
from onvifsoap.client._base import HttpResponse
from onvifsoap.client._base import TransportBase
from onvifsoap.error import TransportError


def _root_url(url):
    parts = urlsplit(url)
    return "%s://%s/" % (parts.scheme, parts.netloc)


class HttpTransport(TransportBase):
    """A transport built on a :mod:`urllib.request` opener.

    :param timeout: Socket timeout in seconds. Defaults to the global socket
        timeout.
    :param handlers: Extra urllib handlers for the opener, e.g. a
        ``HTTPSHandler`` with a custom ssl context.
    """

    def __init__(self, timeout=None, handlers=()):
        self.timeout = timeout
        self.handlers = list(handlers)
        self.opener = build_opener(*self.handlers)

        self.digest_handler = None
        self.__credentials = None
        self.__known_urls = set()
        self.__challenges = {}

    def install_digest_auth(self, url, username, password, challenge=None):
        self.__credentials = (username, password)
        self.__known_urls = set()

        self.digest_handler = HTTPDigestAuthHandler(
                                             HTTPPasswordMgrWithDefaultRealm())
        self.opener = build_opener(self.digest_handler, *self.handlers)

        if url is not None:
            self.__register_url(url)
            if challenge is not None and \
                                    challenge.lower().startswith('digest '):
                self.__challenges[url] = challenge

    def __register_url(self, url):
        root = _root_url(url)
        if root in self.__known_urls:
            return

        username, password = self.__credentials
        self.digest_handler.passwd.add_password(None, root, username, password)
        self.__known_urls.add(root)

    def __get_timeout(self):
        if self.timeout is None:
            return socket.getdefaulttimeout()
        return self.timeout

    def post(self, url, data, content_type):
        try:
            request = Request(url, data=data, method='POST',
                                         headers={'Content-Type': content_type})
        except ValueError as e:
            raise TransportError("could not POST request: %s" % (e,))

        request.timeout = self.__get_timeout()

        try:
            response = None

            if self.digest_handler is not None:
                self.__register_url(url)

                # answers the challenge of the 401 that made us install the
                # handler, instead of waiting for the server to send it again.
                challenge = self.__challenges.pop(url, None)
                if challenge is not None:
                    response = self.digest_handler.retry_http_digest_auth(
                                                            request, challenge)

            if response is None:
                response = self.opener.open(request, timeout=request.timeout)

        except HTTPError as e:
            response = e

        except (URLError, HTTPException, OSError, ValueError) as e:
            raise TransportError("could not POST request: %s" % (e,))

        try:
            body = response.read()
        except (HTTPException, OSError) as e:
            raise TransportError("could not read response body: %s" % (e,))
        finally:
            response.close()

        return HttpResponse(response.getcode(), body, headers=response.headers,
                                       reason=getattr(response, 'reason', None))


class HttpClient(ClientBase):
    """A client that sends requests through a :class:`HttpTransport` unless
    another transport is given. ::

        client = HttpClient(username='admin', password='12345')
        envelope = client.do(Request(
            'http://192.168.0.64/onvif/device_service',
            namespaces={'tds': 'http://www.onvif.org/ver10/device/wsdl'},
            body=b'<tds:GetDeviceInformation/>',
        ))

    :param timeout: Passed to the default :class:`HttpTransport`.

    The remaining arguments are those of
    :class:`onvifsoap.client._base.ClientBase`.
    """

    def __init__(self, username=None, password=None, transport=None,
                                                       timeout=None, **kwargs):
        if transport is None:
            transport = HttpTransport(timeout=timeout)

        super(HttpClient, self).__init__(transport, username=username,
                                                   password=password, **kwargs)
