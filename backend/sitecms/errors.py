import logging
from flask import jsonify
from sitecms.domain.exceptions import CmsError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    @app.errorhandler(CmsError)
    def handle_cms_error(error):
        if error.status_code >= 500:
            logger.error("%s: %s", error.__class__.__name__, error.message)
        else:
            logger.info("%s: %s", error.__class__.__name__, error.message)

        response = jsonify({
            "error": error.__class__.__name__,
            "message": error.message
        })
        response.status_code = error.status_code
        return response
