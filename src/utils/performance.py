import time
from functools import wraps
import logging
from typing import Callable

# Import configuration
from src.config.settings import config

logger = logging.getLogger(__name__)


def _record_info(result) -> str:
    """Describe the size of a query result for log messages"""
    if isinstance(result, dict):
        total_records = sum(len(v) for v in result.values() if hasattr(v, '__len__'))
        return f" ({total_records} total records)"
    if hasattr(result, '__len__'):
        try:
            return f" ({len(result)} records)"
        except TypeError:
            return ""
    return ""


def monitor_performance(func_name: str = "Unknown"):
    """
    Decorator to monitor function performance and log execution times
    Can be disabled via configuration

    Usage:
        @monitor_performance("Centre User Record Filtering")
        def filter_records(dataset, filter_state):
            # function code here

    Args:
        func_name (str): Custom name for the function being monitored

    Returns:
        Decorated function with performance monitoring (or passthrough if disabled)
    """
    def decorator(func: Callable) -> Callable:
        # If performance monitoring is disabled, return the original function
        if not config.ENABLE_PERFORMANCE_MONITORING:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration = time.time() - start_time

                logger.debug(f"⏱️ {func_name} completed in {duration:.2f} seconds")

                # Log slow operations based on threshold
                if duration > config.SLOW_OPERATION_THRESHOLD:
                    logger.warning(f"⚠️ Slow operation detected: {func_name} took {duration:.2f} seconds")

                return result

            except Exception as e:
                duration = time.time() - start_time
                logger.error(f"❌ {func_name} failed after {duration:.2f} seconds: {str(e)}")
                raise

        return wrapper
    return decorator


def monitor_query_performance(query_name: str = "Unknown Query"):
    """
    Specialized decorator for data source load monitoring
    Can be disabled via configuration

    Usage:
        @monitor_query_performance("Centre User Data Load")
        def load_data():
            # file or database read here
    """
    def decorator(func: Callable) -> Callable:
        # If performance monitoring is disabled, return the original function
        if not config.ENABLE_PERFORMANCE_MONITORING:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration = time.time() - start_time
                record_info = _record_info(result)

                logger.info(f"🗃️ {query_name} completed in {duration:.2f} seconds{record_info}")

                # Log slow queries based on threshold
                if duration > config.SLOW_QUERY_THRESHOLD:
                    logger.warning(f"⚠️ Slow query detected: {query_name} took {duration:.2f} seconds{record_info}")

                return result

            except Exception as e:
                duration = time.time() - start_time
                logger.error(f"❌ {query_name} failed after {duration:.2f} seconds: {str(e)}")
                raise

        return wrapper
    return decorator
