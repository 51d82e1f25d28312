import os
from typing import Dict, Any, Optional

class AppConfig:
    """
    Centralized application configuration
    """

    def __init__(self):
        # Performance monitoring settings
        self.ENABLE_PERFORMANCE_MONITORING = self._get_bool_env(
            'ENABLE_PERFORMANCE_MONITORING',
            default=True  # Default to enabled for development
        )

        # Performance thresholds
        self.SLOW_QUERY_THRESHOLD = self._get_float_env(
            'SLOW_QUERY_THRESHOLD',
            default=3.0  # seconds
        )

        self.SLOW_OPERATION_THRESHOLD = self._get_float_env(
            'SLOW_OPERATION_THRESHOLD',
            default=5.0  # seconds
        )

        # Environment detection
        self.ENVIRONMENT = os.getenv('ENVIRONMENT', 'development').lower()
        self.IS_DEVELOPMENT = self.ENVIRONMENT == 'development'

        # Logging configuration
        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.ENABLE_FILE_LOGGING = self._get_bool_env('ENABLE_FILE_LOGGING', default=False)
        self.LOG_FILE = os.getenv('LOG_FILE', 'centre_user_insights.log')

        # Centre user data source (database wins over file when both are set)
        self.CENTRE_USER_DATA_FILE = os.getenv('CENTRE_USER_DATA_FILE', 'data/centre_user_data.csv')
        self.CENTRE_USER_DATABASE_URL = self._get_optional_env('CENTRE_USER_DATABASE_URL')
        self.CENTRE_USER_TABLE = os.getenv('CENTRE_USER_TABLE', 'centre_user_data')

        # Data table
        self.DEFAULT_PAGE_SIZE = self._get_int_env('DEFAULT_PAGE_SIZE', default=10)

        # Flask-Caching
        self.CACHE_TYPE = os.getenv('CACHE_TYPE', 'SimpleCache')
        self.CACHE_DEFAULT_TIMEOUT = self._get_int_env('CACHE_DEFAULT_TIMEOUT', default=300)

    def _get_bool_env(self, key: str, default: bool = False) -> bool:
        """Get boolean environment variable with fallback"""
        value = os.getenv(key, '').lower()
        if value in ('true', '1', 'yes', 'on'):
            return True
        elif value in ('false', '0', 'no', 'off'):
            return False
        return default

    def _get_float_env(self, key: str, default: float) -> float:
        """Get float environment variable with fallback"""
        try:
            return float(os.getenv(key, str(default)))
        except (ValueError, TypeError):
            return default

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable with fallback"""
        try:
            return int(os.getenv(key, str(default)))
        except (ValueError, TypeError):
            return default

    def _get_optional_env(self, key: str) -> Optional[str]:
        """Get string environment variable, treating blank values as unset"""
        value = os.getenv(key, '').strip()
        return value or None

    def get_cache_config(self) -> Dict[str, Any]:
        """Get Flask-Caching configuration"""
        return {
            'CACHE_TYPE': self.CACHE_TYPE,
            'CACHE_DEFAULT_TIMEOUT': self.CACHE_DEFAULT_TIMEOUT
        }

# Global configuration instance
config = AppConfig()
