class PipelineError(Exception):

    def __init__(self, message, code=None, params=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.params = params

    def __str__(self):
        return str(self.message)


class ImproperlyConfigured(Exception):
    pass


class PipelineNotConfigured(PipelineError, ImproperlyConfigured):
    pass


class EventDoesNotExist(PipelineError, ValueError):
    pass


class ConnectionDoesNotExist(PipelineError, ValueError):
    pass


class ObjectDoesNotExist(PipelineError, KeyError):
    pass


class InvalidPipelineDocument(PipelineError, ValueError):

    def __init__(self, *args, exception=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.exception = exception
