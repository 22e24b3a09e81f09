"""
Package Default Values
All hardcoded values should be defined here and accessed via Config.get()
Applications override them in config/api.py and config/app.py
"""

# ============================================================================
# GENERATOR DEFAULTS
# ============================================================================

# Output directories (relative to the application base path)
DEFAULT_POLICY_PATH = 'app/policies'
DEFAULT_REPOSITORY_PATH = 'app/repositories'

# Package that generated repositories import models from
DEFAULT_MODEL_NAMESPACE = 'app.models'

# Stub templates
DEFAULT_STUB_DIRECTORY = 'stubs'
DEFAULT_STUB_EXTENSION = '.stub'

# ============================================================================
# REPOSITORY DEFAULTS
# ============================================================================

DEFAULT_PER_PAGE = 15

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_APP_ENV = 'local'
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5

# Loggers set up when Artisan starts (config key: app.allowed_logging_handlers)
DEFAULT_LOGGING_HANDLERS = {
    'package': {
        'name': 'larasanic_api',
        'format_type': 'json',
        'filter_sensitive': True,
        'file_name': 'larasanic_api',
    },
}
