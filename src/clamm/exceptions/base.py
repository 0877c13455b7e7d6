class ClammError(Exception):
    """
    Base exception used as the parent class for all exceptions raised by this package.

    Calling code should catch `ClammError` and derived classes separately before general
    exceptions, e.g.:

    ```
    try:
        pool.get_output_amount(amount)
    except InsufficientLiquidity:
        ... # the pool cannot fill this amount, try another
    except ClammError:
        ... # bad input data, e.g. an inconsistent pool state or tick list
    except Exception:
        ... # handle exceptions raised by 3rd party dependencies or Python built-ins
    ```

    An optional string-formatted message may be attached to the exception and retrieved by accessing
    the `.message` attribute.
    """

    message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
            super().__init__(message)


class ClammValueError(ClammError): ...

