#!/usr/bin/env python
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


import socket
import threading
import unittest

from http.server import BaseHTTPRequestHandler, HTTPServer

from onvifsoap.client import HttpClient
from onvifsoap.client import HttpResponse
from onvifsoap.client import HttpTransport
from onvifsoap.client import Request
from onvifsoap.error import TransportError


NS_DEVICE = 'http://www.onvif.org/ver10/device/wsdl'

OK = b'<env:Envelope xmlns:env="http://www.w3.org/2003/05/soap-envelope" ' \
     b'xmlns:tds="http://www.onvif.org/ver10/device/wsdl"><env:Body>' \
     b'<tds:GetDeviceInformationResponse/></env:Body></env:Envelope>'

CHALLENGE = 'Digest realm="onvif", nonce="abc", qop="auth"'


class _Handler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get('Content-Length', 0))
        self.server.seen.append((self.path, dict(self.headers),
                                                      self.rfile.read(length)))

        if self.path == '/unauthorized' and \
                               self.headers.get('Authorization') is None:
            self.send_response(401)
            self.send_header('WWW-Authenticate', CHALLENGE)
            self.send_header('Content-Length', '0')
            self.end_headers()
            return

        self.send_response(200)
        self.send_header('Content-Type', 'application/soap+xml')
        self.send_header('Content-Length', str(len(OK)))
        self.end_headers()
        self.wfile.write(OK)

    def log_message(self, format, *args):
        pass


class TestHttpTransport(unittest.TestCase):
    def setUp(self):
        self.server = HTTPServer(('127.0.0.1', 0), _Handler)
        self.server.seen = []
        self.thread = threading.Thread(target=self.server.serve_forever)
        self.thread.daemon = True
        self.thread.start()

        self.base = 'http://127.0.0.1:%d' % self.server.server_address[1]

    def tearDown(self):
        self.server.shutdown()
        self.server.server_close()
        self.thread.join()

    def test_post(self):
        transport = HttpTransport(timeout=5)

        response = transport.post(self.base + '/onvif/device_service', b'<a/>',
                                                       'application/soap+xml')

        assert isinstance(response, HttpResponse)
        assert response.status == 200
        assert response.read() == OK
        assert response.get_header('content-type') == 'application/soap+xml'

        path, headers, body = self.server.seen[0]
        assert path == '/onvif/device_service'
        assert body == b'<a/>'
        assert headers['Content-Type'] == 'application/soap+xml'

    def test_error_status_is_returned(self):
        transport = HttpTransport(timeout=5)

        response = transport.post(self.base + '/unauthorized', b'<a/>',
                                                       'application/soap+xml')

        assert response.status == 401
        assert response.get_header('WWW-Authenticate') == CHALLENGE

    def test_digest_challenge_is_answered(self):
        transport = HttpTransport(timeout=5)
        url = self.base + '/unauthorized'

        transport.install_digest_auth(url, 'admin', '12345', CHALLENGE)
        response = transport.post(url, b'<a/>', 'application/soap+xml')

        assert response.status == 200
        assert len(self.server.seen) == 1

        authorization = self.server.seen[0][1]['Authorization']
        assert authorization.startswith('Digest ')
        assert 'username="admin"' in authorization
        assert 'realm="onvif"' in authorization

    def test_digest_without_challenge(self):
        transport = HttpTransport(timeout=5)
        url = self.base + '/unauthorized'

        transport.install_digest_auth(None, 'admin', '12345')
        response = transport.post(url, b'<a/>', 'application/soap+xml')

        # the opener answers the 401 on its own
        assert response.status == 200
        assert len(self.server.seen) == 2
        assert 'Authorization' not in self.server.seen[0][1]
        assert 'Authorization' in self.server.seen[1][1]

    def test_client_escalates(self):
        client = HttpClient('admin', '12345', timeout=5)

        env = client.do(Request(self.base + '/unauthorized',
                                  namespaces={'tds': NS_DEVICE},
                                  body=b'<tds:GetDeviceInformation/>'))

        assert env.body.unmarshal().tag == \
                                    '{%s}GetDeviceInformationResponse' % NS_DEVICE
        assert client.auth_mode == 'digest'
        assert len(self.server.seen) == 2
        assert 'Authorization' in self.server.seen[1][1]

    def test_connection_refused(self):
        sock = socket.socket()
        sock.bind(('127.0.0.1', 0))
        port = sock.getsockname()[1]
        sock.close()

        transport = HttpTransport(timeout=5)

        self.assertRaises(TransportError, transport.post,
                 'http://127.0.0.1:%d/' % port, b'<a/>', 'application/soap+xml')

    def test_bad_url(self):
        self.assertRaises(TransportError, HttpTransport().post, 'not a url',
                                                b'<a/>', 'application/soap+xml')


class TestHttpResponse(unittest.TestCase):
    def test_headers(self):
        response = HttpResponse(401, b'', {'WWW-Authenticate': CHALLENGE})

        assert response.get_header('www-authenticate') == CHALLENGE
        assert response.get_header('x-missing', 'd') == 'd'

    def test_rebuffer(self):
        response = HttpResponse(200, b'<a/>')

        assert response.rebuffer() == b'<a/>'
        assert response.read() == b'<a/>'


if __name__ == '__main__':
    unittest.main()
