from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Annotated, Optional, Protocol

from ioc import Container

if TYPE_CHECKING:
    from decimal import Decimal


class Plain:
    t = 1


class WithDefault:
    def __init__(self, plain: Plain, default="boris"):
        self.plain = plain
        self.default = default


class Nested:
    def __init__(self, inner: WithDefault):
        self.inner = inner


class NeedsHost:
    def __init__(self, host, inner: WithDefault):
        self.host = host
        self.inner = inner


class NeedsCharset:
    def __init__(self, charset):
        self.charset = charset


class NeedsContainer:
    def __init__(self, container: Container):
        self.container = container


class KeywordOnly:
    def __init__(self, *, plain: Plain, retries: int = 3):
        self.plain = plain
        self.retries = retries


class Qualified:
    def __init__(self, cache: Annotated[Optional[object], "cache"]):
        self.cache = cache


class Transport(ABC):
    @abstractmethod
    def send(self, message: str) -> str:
        ...


class SmtpTransport(Transport):
    def send(self, message: str) -> str:
        return f"smtp: {message}"


class Mailer:
    def __init__(self, transport: Transport, sender: str = "noreply"):
        self.transport = transport
        self.sender = sender


class Greeter(Protocol):
    def greet(self) -> str:
        ...


class CycleA:
    def __init__(self, b: "CycleB"):
        self.b = b


class CycleB:
    def __init__(self, a: CycleA):
        self.a = a


class CallTarget:
    def work(self, *args):
        return list(args)

    def inject(self, plain: Plain, default="jack"):
        return [plain, default]

    @staticmethod
    def inject_static(plain: Plain, default="jack"):
        return [plain, default]


def inject_function(plain: Plain, default="jack"):
    return [plain, default]


class Logger:
    pass


class OptionalLogger:
    def __init__(self, logger: Optional[Logger] = None):
        self.logger = logger


class UnionLogger:
    def __init__(self, logger: "Logger | None"):
        self.logger = logger


class OptionalCount:
    def __init__(self, count: Optional[int] = None):
        self.count = count


class CheckedOnly:
    def __init__(self, amount: "Decimal" = None):
        self.amount = amount


class CheckedOnlyRequired:
    def __init__(self, amount: "Decimal", plain: Plain):
        self.amount = amount
        self.plain = plain
