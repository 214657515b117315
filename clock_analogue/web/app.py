# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
clock-analogue web host.
Serves rendered clock snapshots and a small JSON API.
"""

import logging
import os
from typing import Any, Dict

from flask import Flask, jsonify, render_template, request

from ..config import ClockAppConfig, config_to_dict
from ..geometry import hand_rotations, rotation_transform
from ..widget import ClockAnalogue

logger = logging.getLogger(__name__)

# Live pages reload once per second; the server never runs an animation loop
REFRESH_SECONDS = 1


def create_app(config: ClockAppConfig) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Application configuration; its clock overrides are the
            baseline that query parameters are layered on.

    Returns:
        Flask application.
    """
    app = Flask(
        __name__,
        template_folder=os.path.join(os.path.dirname(__file__), 'templates'),
    )

    # Store references
    app.clock_config = config

    def build_widget() -> ClockAnalogue:
        attributes: Dict[str, Any] = dict(app.clock_config.clock)
        for key, value in request.args.items():
            # Query overrides replace configured ones regardless of case
            for existing in [k for k in attributes if isinstance(k, str) and k.lower() == key.lower()]:
                del attributes[existing]
            attributes[key] = value
        return ClockAnalogue(attributes)

    # Routes

    @app.route('/')
    @app.route('/clock')
    def clock_page():
        """Clock snapshot page."""
        widget = build_widget()
        result = widget.snapshot()
        _sample, live = widget.sample()
        return render_template(
            'clock.html',
            markup=result.to_html(),
            host_style=result.host_style,
            live=live,
            refresh_seconds=REFRESH_SECONDS,
        )

    @app.route('/api/clock')
    def api_clock():
        """Current clock state as JSON."""
        widget = build_widget()
        configuration = widget.options
        sample, live = widget.sample()
        rotations = hand_rotations(sample, configuration.snap)
        result = widget.snapshot()

        return jsonify({
            "configuration": configuration.to_attributes(),
            "time": sample.to_dict(),
            "live": live,
            "rotations": {
                **rotations.to_dict(),
                "transforms": {
                    "hours": rotation_transform(rotations.hours),
                    "minutes": rotation_transform(rotations.minutes),
                    "seconds": rotation_transform(rotations.seconds),
                },
            },
            "hour_markers": [el.text or "" for el in result.registry.markers()],
            "marker_color": result.marker_color,
        })

    @app.route('/api/config', methods=['GET'])
    def api_get_config():
        """Get current configuration."""
        return jsonify(config_to_dict(app.clock_config))

    return app


def run_web_server(config: ClockAppConfig) -> None:
    """
    Run the web server (blocking).

    Args:
        config: Application configuration.
    """
    app = create_app(config)

    logger.info(f"Starting web server on {config.web.host}:{config.web.port}")

    # Disable Flask's default logging for production
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    app.run(
        host=config.web.host,
        port=config.web.port,
        debug=False,
        threaded=True
    )
