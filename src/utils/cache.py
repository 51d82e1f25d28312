from flask_caching import Cache

from src.config.settings import config

# Bound to the Flask server in app.py via cache.init_app(server)
cache = Cache(config=config.get_cache_config())
