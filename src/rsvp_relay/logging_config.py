import logging
import logging.config


def setup_logging(level: str = "INFO"):
    """Configura o logging para a aplicação."""
    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': {
            'default': {
                'level': 'DEBUG',
                'formatter': 'standard',
                'class': 'logging.StreamHandler',
            },
        },
        'loggers': {
            '': {  # root logger
                'handlers': ['default'],
                'level': level,
                'propagate': False
            },
            'rsvp_relay': {
                'handlers': ['default'],
                'level': level,
                'propagate': False
            },
        }
    }

    logging.config.dictConfig(logging_config)
