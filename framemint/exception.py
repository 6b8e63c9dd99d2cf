class FrameMintException(Exception):
    pass


class InvalidArgumentException(FrameMintException):
    pass


class InvalidDataException(FrameMintException):
    pass


class InvalidConfigException(FrameMintException):
    pass


class UploadFailedException(FrameMintException):
    pass


class MintFailedException(FrameMintException):
    pass


class VerificationFailedException(MintFailedException):
    pass


class ActionPendingException(FrameMintException):
    pass


class RunInProgressException(FrameMintException):
    pass
