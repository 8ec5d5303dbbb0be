from __future__ import annotations

from flask import Flask, Response, jsonify, request

from current_feeds import Encoding, FeedConfig, FeedService, FetchFailure

app = Flask(__name__)
_config = FeedConfig.from_env()
_service = FeedService(_config)


@app.get("/health")
def healthcheck():
    return {"status": "ok"}


@app.get("/<name>")
def fetch_feed(name: str):
    if name not in _service.providers:
        return jsonify({"error": f"Unknown feed `{name}`"}), 404
    encoding = Encoding.resolve(request.args.get(_config.encoding_param_name))
    try:
        body, mimetype = _service.render(name, encoding)
        return Response(body, content_type=mimetype)
    except FetchFailure:
        app.logger.warning("Feed %s unavailable and nothing cached", name)
        return jsonify({"error": f"Feed `{name}` is temporarily unavailable"}), 502
    except Exception:  # pragma: no cover - runtime guard
        app.logger.exception("Uncaught exception when handling /%s", name)
        return jsonify({"error": "Unexpected server error"}), 500


if __name__ == "__main__":
    app.run(host=_config.host, port=_config.port, debug=_config.debug)
