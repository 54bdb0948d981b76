"""
Email transport module.

This module provides outbound email using FastMail with support for:
- Named delivery services (Postmark by default)
- CSS inlining of rendered bodies
- An ordered chain of compile transforms run before every send
- Structured error handling and logging

Bodies handed to ``MailTransport.send`` are already rendered; the
transport only rewrites and delivers them.
"""

import copy
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from fastapi.concurrency import run_in_threadpool
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from lad.core.exceptions import ConfigurationError, ExternalServiceError, LadException
from lad.core.logging import logger as default_logger
from lad.core.mail_transforms import CssInliner

Transform = Callable[[str], str]

# service name -> SMTP host, port, STARTTLS, implicit TLS
MAIL_SERVICES: Dict[str, Dict[str, Any]] = {
    "postmark": {"server": "smtp.postmarkapp.com", "port": 587, "starttls": True, "ssl_tls": False},
    "gmail": {"server": "smtp.gmail.com", "port": 587, "starttls": True, "ssl_tls": False},
    "sendgrid": {"server": "smtp.sendgrid.net", "port": 587, "starttls": True, "ssl_tls": False},
    "mailgun": {"server": "smtp.mailgun.org", "port": 587, "starttls": True, "ssl_tls": False},
}


class MailTransport:
    """
    Outbound mail transport with a compile stage.

    ``compile`` runs the CSS inliner first and then every transform
    given at construction, in order. The chain is fixed once built;
    ``use`` returns an extended copy. ``send`` compiles the
    body and only then hands the message to the delivery service, so a
    failing transform means nothing is delivered.
    """

    def __init__(
        self,
        service: str,
        auth: Mapping[str, Optional[str]],
        sender: str,
        send: bool = True,
        css_inliner: Optional[CssInliner] = None,
        transforms: Sequence[Transform] = (),
        logger: Optional[Any] = None,
    ) -> None:
        """
        Args:
            service: Name of a delivery service in ``MAIL_SERVICES``.
            auth: ``user`` and ``pass`` credentials for the service.
            sender: Default ``From`` address.
            send: Deliver over the network; when False every transform
                still runs but the SMTP send is suppressed.
            css_inliner: Optional CSS inlining step.
            transforms: Compile transforms, run in order after the CSS
                inliner.
            logger: Optional logging collaborator.

        Raises:
            ConfigurationError: If the service is unknown, or sending is
                enabled without credentials.
        """
        self.logger = logger or default_logger.bind(component="email")
        if service not in MAIL_SERVICES:
            raise ConfigurationError(
                detail=f"Unknown mail service: {service}",
                context={"service": service, "known": sorted(MAIL_SERVICES)}
            )
        user, password = auth.get("user"), auth.get("pass")
        if send and not (user and password):
            raise ConfigurationError(
                detail=f"Mail service '{service}' requires credentials when sending is enabled",
                context={"service": service}
            )

        server = MAIL_SERVICES[service]
        self.service = service
        self.send_enabled = send
        self.css_inliner = css_inliner
        self._transforms: Tuple[Transform, ...] = tuple(transforms)
        self.config = ConnectionConfig(
            MAIL_USERNAME=user or "",
            MAIL_PASSWORD=password or "",
            MAIL_FROM=sender,
            MAIL_PORT=server["port"],
            MAIL_SERVER=server["server"],
            MAIL_STARTTLS=server["starttls"],
            MAIL_SSL_TLS=server["ssl_tls"],
            USE_CREDENTIALS=bool(user),
            SUPPRESS_SEND=0 if send else 1,
        )
        self.fastmail = FastMail(self.config)

    @property
    def transforms(self) -> Tuple[Transform, ...]:
        return self._transforms

    def use(self, transform: Transform) -> "MailTransport":
        """
        Return a transport whose compile stage also runs ``transform``.

        The compile stage of this transport is left untouched.
        """
        extended = copy.copy(self)
        extended._transforms = self._transforms + (transform,)
        return extended

    def compile(self, html: str) -> str:
        """Run the CSS inliner and the compile transforms over ``html``."""
        if self.css_inliner is not None:
            html = self.css_inliner(html)
        for transform in self._transforms:
            html = transform(html)
        return html

    async def send(self, message: MessageSchema) -> MessageSchema:
        """
        Compile and deliver ``message``.

        Returns:
            The message as it was handed to the delivery service.

        Raises:
            ExternalServiceError: If a transform or the delivery fails.
        """
        error_context = {
            "recipients": [str(r) for r in message.recipients],
            "subject": message.subject,
            "service_name": self.service
        }
        try:
            body = await run_in_threadpool(self.compile, message.body or "")
        except Exception as e:
            self.logger.error(
                "Failed to compile email",
                extra={**error_context, "error": str(e), "error_type": type(e).__name__}
            )
            if isinstance(e, LadException):
                raise
            raise ExternalServiceError(
                detail="Failed to compile email",
                service_name="email",
                context=error_context
            ) from e

        compiled = message.model_copy(update={"body": body})

        self.logger.info("Sending email", extra=error_context)
        try:
            await self.fastmail.send_message(compiled)
        except Exception as e:
            self.logger.error(
                "Failed to send email",
                extra={**error_context, "error": str(e), "error_type": type(e).__name__}
            )
            raise ExternalServiceError(
                detail="Failed to send email",
                service_name="email",
                context=error_context
            ) from e

        if self.send_enabled:
            self.logger.info("Email sent successfully", extra=error_context)
        else:
            self.logger.info("Email sending suppressed", extra=error_context)
        return compiled

    async def send_email(self, email_to: str, subject: str, html: str) -> MessageSchema:
        """Send a rendered HTML body to a single recipient."""
        message = MessageSchema(
            subject=subject,
            recipients=[email_to],
            body=html,
            subtype=MessageType.html
        )
        return await self.send(message)
