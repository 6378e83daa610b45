import logging
import logging.config
from question_bank.config import settings


def configure_logging(level: str = None):
    """Apply the console logging setup used by the API and the init script"""
    level = (level or settings.log_level).upper()

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
        },
        'handlers': {
            'console': {
                'level': level,
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
            },
        },
        'loggers': {
            '': {
                'handlers': ['console'],
                'level': level,
                'propagate': True,
            }
        }
    }

    logging.config.dictConfig(logging_config)
