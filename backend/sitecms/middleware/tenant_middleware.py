from flask import request, g, current_app
from sitecms.domain.tenancy import sanitize_site_id


def tenant_middleware(blueprint):
    @blueprint.before_request
    def load_site():
        raw = request.args.get("siteId") or request.headers.get("X-Site-ID")

        # Attach the sanitized site id to the request context
        g.site_id = sanitize_site_id(raw, current_app.config["DEFAULT_SITE_ID"])
