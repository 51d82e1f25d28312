from src.callbacks.centre_user_callbacks.centre_user_data_loader import register_centre_user_data_loader_callbacks
from src.callbacks.centre_user_callbacks.centre_user_filters import register_centre_user_filter_callbacks
from src.callbacks.centre_user_callbacks.centre_user_data_table import register_centre_user_data_table_callbacks
from src.services.dataset_loader import DatasetLoader


def register_all_callbacks(app, loader: DatasetLoader = None):
    """Register every dashboard callback on the given Dash app"""
    loader = loader or DatasetLoader()
    register_centre_user_data_loader_callbacks(app, loader)
    register_centre_user_filter_callbacks(app)
    register_centre_user_data_table_callbacks(app)
