
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

__version__ = '0.1.0'

from onvifsoap._base import AUTH_MODE_NONE
from onvifsoap._base import AUTH_MODE_WS_SECURITY
from onvifsoap._base import AUTH_MODE_DIGEST

from onvifsoap.error import OnvifSoapError
from onvifsoap.error import TransportError
from onvifsoap.error import HttpStatusError
from onvifsoap.error import MarshalError
from onvifsoap.error import UnmarshalError
from onvifsoap.error import NoResponseError
from onvifsoap.error import SoapDecodeError
from onvifsoap.error import XmlSyntaxError
from onvifsoap.error import UnexpectedElementError
from onvifsoap.error import UnexpectedTokenError
from onvifsoap.error import MissingBodyError
from onvifsoap.error import SecurityError
from onvifsoap.error import UnresolvedNamespacesError
from onvifsoap.error import UnauthorizedError

from onvifsoap.util.xml import Namespaces

from onvifsoap.model import Envelope, Header, Body, Fault
from onvifsoap.model import Security, UsernameToken, new_security

from onvifsoap.client import Request, Client, ClientBase, HttpClient
from onvifsoap.client import TransportBase, HttpTransport, HttpResponse
