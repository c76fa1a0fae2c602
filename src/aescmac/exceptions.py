class CMACException(Exception):
    """Base exception for all CMAC exceptions."""

    pass


class InvalidKeyLengthError(CMACException):
    """The root key is not exactly 16 bytes long.
    The ``length`` attribute carries the length that was received.
    """

    def __init__(self, msg, length):
        super().__init__(msg)
        self.length = length


class InvalidTagLengthError(CMACException):
    """The requested tag length is not an integer between 0 and 128 bits."""

    def __init__(self, msg, tag_length):
        super().__init__(msg)
        self.tag_length = tag_length


class InvalidBlockLengthError(CMACException):
    """Data used as a cipher block is not exactly 16 bytes long."""

    pass
