"""
Flask service exposing method channels over a local HTTP call boundary.
Each POST to /channel/<name> is one independent method invocation.
"""

from typing import Optional

from flask import Flask, jsonify, request

from wifiinfo.channel.method_channel import MethodChannel, ResultStatus
from wifiinfo.config import get_settings, load_config
from wifiinfo.logging import configure_logging, get_logger
from wifiinfo.reader import ConnectionInfoReader
from wifiinfo.wifi.factory import select_provider

logger = get_logger("service.app")


def build_channel(settings: dict) -> MethodChannel:
    """
    Wire provider, reader and channel from settings.

    Args:
        settings: Settings as returned by get_settings()

    Returns:
        MethodChannel ready to serve getWifiInfo
    """
    provider_cfg = settings['provider']
    provider = select_provider(
        backend=provider_cfg['backend'],
        interface=provider_cfg['interface'],
        timeout_seconds=int(provider_cfg['timeout_seconds']),
    )
    reader = ConnectionInfoReader(
        provider, num_levels=int(settings['signal']['num_levels']))
    return MethodChannel(reader, name=settings['channel']['name'])


def create_app(channel: Optional[MethodChannel] = None,
               settings: Optional[dict] = None) -> Flask:
    """
    Create and configure Flask application for the channel service.

    Args:
        channel: MethodChannel instance; built from settings when omitted
        settings: Settings dict; loaded from config when omitted

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    # Dependency injection
    app.settings = settings or get_settings(load_config())
    app.channel = channel or build_channel(app.settings)

    @app.route('/channel/<name>', methods=['POST'])
    def invoke(name):
        """
        Invoke a method on a named channel.

        Expected JSON:
            {
                "method": "getWifiInfo",
                "arguments": null
            }

        Returns:
            JSON result envelope
        """
        if name != app.channel.name:
            logger.warning(f"Call on unknown channel {name!r}")
            return jsonify({
                'status': ResultStatus.ERROR.value,
                'code': 'UNKNOWN_CHANNEL',
                'message': f"No channel named {name}",
            }), 404

        data = request.get_json(silent=True) or {}
        method = data.get('method')
        if not isinstance(method, str) or not method:
            logger.warning("Channel call without a method name")
            return jsonify({
                'status': ResultStatus.ERROR.value,
                'code': 'BAD_REQUEST',
                'message': 'method is required',
            }), 400

        result = app.channel.invoke(method, data.get('arguments'))
        status_code = 500 if result.status is ResultStatus.ERROR else 200
        return jsonify(result.to_dict()), status_code

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint."""
        return jsonify({'status': 'ok'})

    return app


if __name__ == '__main__':
    settings = get_settings(load_config())
    configure_logging(
        log_level=settings['logging']['level'],
        log_file=settings['logging']['file'])

    app = create_app(settings=settings)
    logger.info(
        f"Serving channel {app.channel.name!r} on "
        f"{settings['service']['host']}:{settings['service']['port']}")
    app.run(host=settings['service']['host'],
            port=int(settings['service']['port']), debug=False)
