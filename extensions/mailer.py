# extensions/mailer.py
"""
SMTP 发信扩展。

用法与其它扩展一致：mailer.init_app(app)，之后在应用上下文内调用 mailer.send(msg)。
MAIL_SUPPRESS_SEND=True 时不连接 SMTP，仅把消息追加到 mailer.outbox（测试/本地开发）。
"""
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

from flask import current_app

logger = logging.getLogger(__name__)


@dataclass
class MailMessage:
    subject: str
    sender: str
    to: str
    body_text: Optional[str] = None
    body_html: Optional[str] = None

    def validate(self):
        if not self.to:
            raise ValueError("收件人不能为空")
        if not self.subject:
            raise ValueError("邮件主题不能为空")
        if not self.body_text and not self.body_html:
            raise ValueError("邮件正文不能为空")

    def as_mime(self) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = self.to
        msg["Subject"] = self.subject
        if self.body_text:
            msg.attach(MIMEText(self.body_text, "plain", "utf-8"))
        if self.body_html:
            msg.attach(MIMEText(self.body_html, "html", "utf-8"))
        return msg


class Mailer:
    def __init__(self, app=None):
        self.outbox: List[MailMessage] = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.extensions["mailer"] = self
        if not app.config.get("MAIL_SERVER") and not app.config.get("MAIL_SUPPRESS_SEND"):
            app.logger.warning("MAIL_SERVER is not configured; notification emails will fail to send.")

    def send(self, message: MailMessage):
        message.validate()
        cfg = current_app.config
        if cfg.get("MAIL_SUPPRESS_SEND"):
            self.outbox.append(message)
            logger.debug("mail suppressed: to=%s subject=%s", message.to, message.subject)
            return

        host = cfg.get("MAIL_SERVER")
        if not host:
            raise RuntimeError("SMTP 未配置（缺少 MAIL_SERVER）")
        port = cfg.get("MAIL_PORT", 587)
        username = cfg.get("MAIL_USERNAME")
        password = cfg.get("MAIL_PASSWORD")
        mime = message.as_mime()

        if cfg.get("MAIL_USE_SSL"):
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(host, port, context=context) as server:
                if username and password:
                    server.login(username, password)
                server.sendmail(message.sender, [message.to], mime.as_string())
        else:
            with smtplib.SMTP(host, port) as server:
                if cfg.get("MAIL_USE_TLS"):
                    server.starttls(context=ssl.create_default_context())
                if username and password:
                    server.login(username, password)
                server.sendmail(message.sender, [message.to], mime.as_string())
        logger.info("mail sent: to=%s", message.to)


mailer = Mailer()
