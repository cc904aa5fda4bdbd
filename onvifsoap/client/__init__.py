
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

"""The ``onvifsoap.client`` package contains the negotiating Soap client and
its transports."""

from onvifsoap.client._base import Request
from onvifsoap.client._base import HttpResponse
from onvifsoap.client._base import TransportBase
from onvifsoap.client._base import ClientBase
from onvifsoap.client.http import HttpTransport
from onvifsoap.client.http import HttpClient

Client = HttpClient
