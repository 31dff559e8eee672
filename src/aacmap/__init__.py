import logging

logging.getLogger("aacmap").addHandler(logging.NullHandler())
