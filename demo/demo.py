#!/usr/bin/env python3
"""
Demonstration of Curia Container.

This demo shows:
1. Binding interfaces to implementations
2. Singletons and pre-built instances
3. Named dependencies with Id annotations
4. Aliases and hooks
5. Calling methods with injected parameters
"""

import logging
from abc import ABC, abstractmethod
from typing import Annotated

from curia.container import Container, Id, NotInstantiableError

# Example domain: a small notification service


class Transport(ABC):
    """Abstract message transport."""

    @abstractmethod
    def send(self, recipient: str, body: str) -> str:
        pass


class SmtpTransport(Transport):
    def __init__(self, host: Annotated[str, Id("mail.host")]):
        self.host = host

    def send(self, recipient: str, body: str) -> str:
        return f"SMTP[{self.host}] -> {recipient}: {body}"


class AuditLog:
    def __init__(self):
        self.entries: list[str] = []

    def record(self, entry: str) -> None:
        self.entries.append(entry)


class Notifier:
    def __init__(self, transport: Transport, audit: AuditLog):
        self.transport = transport
        self.audit = audit

    def notify(self, recipient: str, body: str) -> str:
        result = self.transport.send(recipient, body)
        self.audit.record(result)
        return result


class WelcomeController:
    def welcome(self, user: str, notifier: Notifier) -> str:
        return notifier.notify(user, "Welcome aboard!")


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    print("=== Curia Container Demo ===\n")

    container = Container()
    container.instance("mail.host", "smtp.example.com")
    container.singleton(Transport, SmtpTransport)
    container.singleton(AuditLog)
    container.alias("notifier", Notifier)

    # 1. Reflective construction
    print("1. Building Notifier from type hints:")
    notifier = container.get("notifier")
    print(f"   {notifier.notify('alice@example.com', 'Hello!')}")

    # 2. Shared instances
    print("\n2. Shared instances:")
    print(f"   Same transport: {container.get(Transport) is notifier.transport}")
    print(f"   New notifier each time: {container.get(Notifier) is not notifier}")

    # 3. Hooks
    print("\n3. Hooks:")
    container.hook(AuditLog, lambda audit, c: audit.record("audit log resolved"))
    audit = container.get(AuditLog)
    print(f"   Audit entries: {len(audit.entries)}")

    # 4. Method injection
    print("\n4. Calling a controller method:")
    print(f"   {container.call((WelcomeController, 'welcome'), {'user': 'bob@example.com'})}")

    # 5. Method bindings
    print("\n5. Overriding a method call:")
    container.bind_method((WelcomeController, "welcome"), lambda controller, c: "welcome suppressed")
    print(f"   {container.call((WelcomeController, 'welcome'), {'user': 'carol@example.com'})}")

    # 6. Failures
    print("\n6. Unbound abstract types fail:")
    container.forget(Transport)
    try:
        container.get(Notifier)
    except NotInstantiableError as e:
        print(f"   {e}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
