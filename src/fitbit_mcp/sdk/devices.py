"""
Fitbit devices SDK functions.
"""

from typing import List

from fitbit_mcp.sdk.client import FitbitClient, decode
from fitbit_mcp.sdk.credentials import LocalUserDetail
from fitbit_mcp.sdk.models import Device, unwrap
from fitbit_mcp.sdk.types import DeviceType
from fitbit_mcp.sdk.urls import contextualize_url


def get_devices(client: FitbitClient, local_user: LocalUserDetail) -> List[Device]:
    """
    List the trackers and scales paired with the user's account.

    GET /user/-/devices
    """
    url = contextualize_url(client.api_base_url, client.api_version, "/user/-/devices")
    response = client.call("GET", url, local_user, operation="retrieving devices")
    return decode(response, Device.from_json_list, "retrieving devices")


def get_device(
    client: FitbitClient, local_user: LocalUserDetail, device_id: str, device_type: DeviceType
) -> Device:
    """
    GET /user/-/devices/{tracker|scale}/{device_id}
    """
    url = contextualize_url(
        client.api_base_url, client.api_version, f"/user/-/devices/{device_type.url_segment}/{device_id}"
    )
    response = client.call("GET", url, local_user, operation="retrieving device")
    return decode(response, lambda body: Device.from_json(unwrap(body, "device")), "retrieving device")
