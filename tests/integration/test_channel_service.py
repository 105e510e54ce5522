"""
Integration tests for the channel service.
Tests the full UI-layer round trip: client -> Flask service -> channel -> reader -> provider,
using test doubles instead of the OS Wi-Fi service.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from wifiinfo.channel.client import (
    MethodChannelClient,
    MethodNotImplementedError,
    PlatformError,
)
from wifiinfo.channel.method_channel import MethodChannel
from wifiinfo.config import get_settings
from wifiinfo.reader import ConnectionInfo, ConnectionInfoReader
from wifiinfo.service.app import create_app
from wifiinfo.wifi.iw_provider import IwProvider
from wifiinfo.wifi.provider import (
    ConnectionInfoError,
    ConnectionInfoProvider,
    WifiConnection,
)


class MockProvider(ConnectionInfoProvider):
    """Provider simulating the OS Wi-Fi service."""

    def __init__(self, ssid='"HomeNet"', rssi=-50):
        self.ssid = ssid
        self.rssi = rssi
        self.fail_with = None

    def read(self):
        if self.fail_with:
            raise ConnectionInfoError(self.fail_with)
        return WifiConnection(self.ssid, self.rssi)


@pytest.fixture
def provider():
    return MockProvider()


@pytest.fixture
def app(provider):
    channel = MethodChannel(ConnectionInfoReader(provider))
    return create_app(channel=channel, settings=get_settings())


@pytest.fixture
def http(app):
    return app.test_client()


@pytest.fixture
def client(http):
    """MethodChannelClient whose HTTP calls go to the Flask test client."""

    def post(url, json=None, timeout=None):
        path = url.replace("http://wifiinfo.local", "")
        response = http.post(path, json=json)
        return MagicMock(
            status_code=response.status_code,
            json=MagicMock(return_value=response.get_json()))

    with patch('wifiinfo.channel.client.requests.post', side_effect=post):
        yield MethodChannelClient(base_url="http://wifiinfo.local/")


class TestChannelEndpoint:
    """Test POST /channel/<name>."""

    def test_get_wifi_info(self, http):
        response = http.post('/channel/wifiInfo', json={'method': 'getWifiInfo'})

        assert response.status_code == 200
        assert response.get_json() == {
            'status': 'success',
            'result': {'ssid': 'HomeNet', 'rssi': -50, 'level': 99},
        }

    def test_unknown_method_not_implemented(self, http):
        response = http.post('/channel/wifiInfo', json={'method': 'unknownMethod'})

        assert response.status_code == 200
        assert response.get_json() == {'status': 'not_implemented'}

    def test_read_failure(self, http, provider):
        provider.fail_with = "permission denied"

        response = http.post('/channel/wifiInfo', json={'method': 'getWifiInfo'})

        assert response.status_code == 500
        body = response.get_json()
        assert body['status'] == 'error'
        assert body['code'] == 'WIFI_UNAVAILABLE'
        assert 'permission denied' in body['message']

    def test_failure_is_per_call(self, http, provider):
        provider.fail_with = "service unavailable"
        assert http.post('/channel/wifiInfo', json={'method': 'getWifiInfo'}).status_code == 500

        provider.fail_with = None
        response = http.post('/channel/wifiInfo', json={'method': 'getWifiInfo'})
        assert response.status_code == 200

    def test_disconnected_defaults(self, http, provider):
        provider.ssid = "<unknown ssid>"
        provider.rssi = -127

        result = http.post(
            '/channel/wifiInfo', json={'method': 'getWifiInfo'}).get_json()['result']

        assert result == {'ssid': '<unknown ssid>', 'rssi': -127, 'level': 0}

    def test_missing_method(self, http):
        response = http.post('/channel/wifiInfo', json={})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'BAD_REQUEST'

    def test_non_json_body(self, http):
        response = http.post('/channel/wifiInfo', data='getWifiInfo')
        assert response.status_code == 400

    def test_unknown_channel(self, http):
        response = http.post('/channel/battery', json={'method': 'getWifiInfo'})

        assert response.status_code == 404
        assert response.get_json()['code'] == 'UNKNOWN_CHANNEL'

    def test_get_not_allowed(self, http):
        assert http.get('/channel/wifiInfo').status_code == 405

    def test_health(self, http):
        response = http.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}


class TestMethodChannelClient:
    """Test the UI-side client against the service."""

    def test_get_wifi_info(self, client):
        info = client.get_wifi_info()
        assert info == ConnectionInfo(ssid="HomeNet", rssi=-50, level=99)

    def test_invoke_method_returns_payload(self, client, provider):
        provider.rssi = -90
        payload = client.invoke_method("getWifiInfo")
        assert payload == {'ssid': 'HomeNet', 'rssi': -90, 'level': 22}

    def test_not_implemented_raises(self, client):
        with pytest.raises(MethodNotImplementedError) as excinfo:
            client.invoke_method("unknownMethod")
        assert excinfo.value.method == "unknownMethod"
        assert excinfo.value.channel == "wifiInfo"

    def test_platform_error_raises(self, client, provider):
        provider.fail_with = "no active connection"

        with pytest.raises(PlatformError) as excinfo:
            client.get_wifi_info()

        assert excinfo.value.code == "WIFI_UNAVAILABLE"
        assert "no active connection" in excinfo.value.message

    def test_unknown_channel_raises_platform_error(self, client):
        client.channel = "battery"
        with pytest.raises(PlatformError) as excinfo:
            client.invoke_method("getWifiInfo")
        assert excinfo.value.code == "UNKNOWN_CHANNEL"

    @patch('wifiinfo.channel.client.requests.post')
    def test_transport_error_propagates(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(requests.exceptions.RequestException):
            MethodChannelClient().get_wifi_info()

    @patch('wifiinfo.channel.client.requests.post')
    def test_request_shape(self, mock_post):
        mock_post.return_value = MagicMock(
            status_code=200,
            json=MagicMock(return_value={
                'status': 'success',
                'result': {'ssid': 'A', 'rssi': -70, 'level': 66}}))

        MethodChannelClient("http://127.0.0.1:9000", timeout_seconds=3).get_wifi_info()

        mock_post.assert_called_once_with(
            "http://127.0.0.1:9000/channel/wifiInfo",
            json={"method": "getWifiInfo", "arguments": None},
            timeout=3)


class TestAppFromSettings:
    """Test building the channel from configuration."""

    @patch('wifiinfo.wifi.iw_provider.subprocess.run')
    def test_iw_backend_end_to_end(self, mock_run):
        mock_run.return_value = MagicMock(
            returncode=0,
            stdout="Connected to aa:bb:cc:dd:ee:01 (on wlp3s0)\n\tSSID: Lab\n\tsignal: -77 dBm\n",
            stderr="")
        settings = get_settings({
            'channel': {'name': 'netInfo'},
            'provider': {'backend': 'iw', 'interface': 'wlp3s0'},
            'signal': {'num_levels': 5},
        })

        app = create_app(settings=settings)

        assert isinstance(app.channel.reader.provider, IwProvider)
        response = app.test_client().post('/channel/netInfo', json={'method': 'getWifiInfo'})
        assert response.get_json()['result'] == {'ssid': 'Lab', 'rssi': -77, 'level': 2}
        assert mock_run.call_args[0][0] == ['iw', 'dev', 'wlp3s0', 'link']

    def test_unknown_backend_fails_at_startup(self):
        with pytest.raises(ValueError):
            create_app(settings=get_settings({'provider': {'backend': 'bogus'}}))

    @pytest.mark.parametrize("num_levels", [0, 200])
    def test_bad_num_levels_fails_at_startup(self, num_levels):
        settings = get_settings({
            'provider': {'backend': 'iw'},
            'signal': {'num_levels': num_levels},
        })
        with pytest.raises(ValueError, match="num_levels"):
            create_app(settings=settings)
