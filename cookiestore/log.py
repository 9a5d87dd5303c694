import logging

client_logger = logging.getLogger("cookiestore.client")
internal_logger = logging.getLogger("cookiestore.internal")
