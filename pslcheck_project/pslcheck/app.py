# pslcheck/app.py
import logging
from http import HTTPStatus

from flask import Flask, request, jsonify, redirect, current_app
from werkzeug.exceptions import HTTPException

from pslcheck.config import HOST, PORT, DEBUG, GITHUB_URL, LOG_LEVEL, DOMAIN_PARAM
from pslcheck.classifier import Classifier
from pslcheck.errors import InvalidDomainError, MalformedRuleError
from pslcheck.rules import RuleTable, load_default

MALFORMED_DOMAIN_MESSAGE = f"Malformed URL query parameter `{DOMAIN_PARAM}`"


def error_response(status, message):
    body = {
        "errorCode": status.value,
        "errorType": status.phrase,
        "errorMessage": message,
    }
    return jsonify(body), status.value


# -------------------------
# App factory
# -------------------------
def create_app(rule_table: RuleTable | None = None):
    app = Flask(__name__)
    app.logger.setLevel(LOG_LEVEL)
    app.json.sort_keys = False

    # The table is built before the first request and never changes afterwards
    if rule_table is None:
        try:
            rule_table = load_default()
        except MalformedRuleError as e:
            app.logger.error("Failed to load public suffix list: %s", e)
            raise SystemExit(f"❌ Malformed public suffix list: {e}")

    summary = rule_table.summary()
    app.logger.info(
        "Rule table ready: %d rules (%d ICANN, %d private) under %d top-level labels",
        summary["rules"], summary["icann"], summary["private"], summary["top_labels"],
    )
    app.config["CLASSIFIER"] = Classifier(rule_table)

    register_routes(app)
    return app


# -------------------------
# Routes
# -------------------------
def register_routes(app):
    @app.route("/publicsuffix", methods=["GET"])
    def public_suffix():
        domain = request.args.get(DOMAIN_PARAM, "")
        if not domain:
            return error_response(HTTPStatus.BAD_REQUEST, MALFORMED_DOMAIN_MESSAGE)

        classifier = current_app.config["CLASSIFIER"]
        try:
            result = classifier.classify(domain)
        except InvalidDomainError as e:
            current_app.logger.warning("Rejected domain %r: %s", domain, e.reason)
            return error_response(HTTPStatus.BAD_REQUEST, f"{MALFORMED_DOMAIN_MESSAGE}: {e.reason}")

        return jsonify(result.to_dict())

    @app.route("/github", methods=["GET"])
    def github():
        return redirect(GITHUB_URL, code=302)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return error_response(HTTPStatus(e.code), e.description)


# -------------------------
# Entry point
# -------------------------
def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.logger.info("listening on http://localhost:%s", PORT)
    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == "__main__":
    main()
