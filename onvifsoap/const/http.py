
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

"""The ``onvifsoap.const.http`` module contains the Http status codes the
client cares about."""

HTTP_200 = '200 OK'
HTTP_202 = '202 Accepted'
HTTP_204 = '204 No Content'

HTTP_400 = '400 Bad Request'
HTTP_401 = '401 Unauthorized'
HTTP_403 = '403 Forbidden'
HTTP_404 = '404 Not Found'
HTTP_405 = '405 Method Not Allowed'
HTTP_415 = '415 Unsupported Media Type'

HTTP_500 = '500 Internal Server Error'
HTTP_503 = '503 Service Unavailable'

HTTP_STATUS_UNAUTHORIZED = 401

_STATUS_LINES = dict((int(s.split(' ', 1)[0]), s) for s in (
    HTTP_200, HTTP_202, HTTP_204, HTTP_400, HTTP_401, HTTP_403, HTTP_404,
    HTTP_405, HTTP_415, HTTP_500, HTTP_503,
))


def status_line(code, reason=None):
    """Returns the ``'<code> <reason>'`` string for the given status code."""

    if reason:
        return '%d %s' % (code, reason)
    return _STATUS_LINES.get(code, str(code))
