import os
import logging
from dotenv import load_dotenv

# Load environment-specific configuration BEFORE importing anything else
def load_environment():
    """Load environment configuration based on ENVIRONMENT variable"""
    environment = os.getenv('ENVIRONMENT', 'development')
    env_file = f'.env.{environment}'

    # Try to load environment-specific file first
    if os.path.exists(env_file):
        load_dotenv(env_file)
        loaded_from = env_file
    else:
        # Fallback to default .env
        load_dotenv()
        loaded_from = '.env'

    return environment, loaded_from

# Load environment first
current_env, env_source = load_environment()

from src.config.settings import config
from src.utils.logging_config import configure_logging

configure_logging(config)
logger = logging.getLogger(__name__)
logger.info(f"✅ Loaded configuration from {env_source}")

import dash
from dash import html, dcc, Input, Output
import dash_bootstrap_components as dbc
from src.utils.cache import cache
from src.components.centre_user_components.centre_user_dashboard_layout import create_centre_user_dashboard_layout
from src.components.welcome_layout import welcome_layout
from src.callbacks import register_all_callbacks


app = dash.Dash(
    __name__,
    external_stylesheets=[
        dbc.themes.BOOTSTRAP,
        "https://cdn.jsdelivr.net/npm/bootstrap-icons@1.10.5/font/bootstrap-icons.css"
    ],
    suppress_callback_exceptions=True
)
app.title = "Centre User Insights"
server = app.server
cache.init_app(server)

with server.app_context():
    cache.clear()

# Sidebar layout
sidebar = dbc.Col(
    [
        html.Div(
            dcc.Link(html.H4("Centre User Insights", className="text-light text-center my-4"), href="/"),
            className="sidebar-logo"
        ),
        dbc.Nav(
            [
                dbc.NavLink(
                    [
                        html.Span("Centre Users", className="sidebar-label"),
                        html.I(className="bi bi-mortarboard sidebar-icon me-2", **{"aria-hidden": "true"}),
                        html.I(className="bi bi-chevron-right sidebar-arrow", **{"aria-hidden": "true"}),
                    ],
                    href="/centre-users",
                    active="exact",
                    className="text-light"
                )
            ],
            vertical=True,
            pills=True,
            className="flex-column"
        ),
    ],
    width=2,
    className="bg-dark vh-100 p-2 sidebar"
)

# Main content placeholder
content = dbc.Col(id="page-content", width=10, className="p-4 main-content")

# Register callbacks BEFORE defining layout
register_all_callbacks(app)

# App layout with URL routing
app.layout = dbc.Container(
    [
        dcc.Location(id="url"),
        dbc.Row([sidebar, content], className="gx-0"),
    ],
    fluid=True
)

#Routing callback
@app.callback(
    Output('page-content', 'children'),
    Input('url', 'pathname')
)
def display_page(pathname):
    if pathname == '/centre-users':
        return create_centre_user_dashboard_layout()
    else:
        return welcome_layout()

# Run app
if __name__ == "__main__":
    logger.info(f"🚀 Starting Centre User Insights in {config.ENVIRONMENT} mode")
    logger.info(f"📊 Performance monitoring: {'enabled' if config.ENABLE_PERFORMANCE_MONITORING else 'disabled'}")
    app.run(host='0.0.0.0', port=8060, debug=config.IS_DEVELOPMENT)
