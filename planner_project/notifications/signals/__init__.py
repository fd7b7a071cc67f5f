from . import monitoring  # noqa
