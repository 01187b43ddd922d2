"""Run the API: check configuration, bootstrap the database, then serve."""
import logging
import sys

from poi_api import create_app
from poi_api.bootstrap import bootstrap
from poi_api.errors import BootstrapError, ConfigurationError

logger = logging.getLogger('poi_api')


def main():
    try:
        app = create_app()
    except ConfigurationError as exc:
        print(f'Failed to start server: {exc}', file=sys.stderr)
        sys.exit(1)

    try:
        bootstrap(app)
    except BootstrapError as exc:
        logger.error('Failed to start server: %s', exc)
        sys.exit(1)

    host = app.config['HOST']
    port = app.config['PORT']
    logger.info('Server running on http://%s:%s', host, port)
    app.run(host=host, port=port, debug=app.config.get('DEBUG', False), use_reloader=False)


if __name__ == '__main__':
    main()
