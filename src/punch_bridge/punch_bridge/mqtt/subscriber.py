from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass
from typing import Any, Callable, Optional

import paho.mqtt.client as mqtt

from ..core.constants import (
    DEFAULT_MQTT_TOPIC,
    MQTT_CONNECT_TIMEOUT_SECONDS,
    MQTT_QOS,
    MQTT_RECONNECT_MAX_DELAY_SECONDS,
    MQTT_RECONNECT_MIN_DELAY_SECONDS,
)
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"mqtt": 1883, "tcp": 1883, "mqtts": 8883, "ssl": 8883}

MessageHandler = Callable[[str, str], Any]


@dataclass(frozen=True)
class BrokerAddress:
    host: str
    port: int
    tls: bool = False
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def public_url(self) -> str:
        """Broker URL without credentials, safe to show on /health."""
        scheme = "mqtts" if self.tls else "mqtt"
        return f"{scheme}://{self.host}:{self.port}"


def parse_broker_url(url: str) -> BrokerAddress:
    parts = urllib.parse.urlsplit(url or "")
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise ConfigurationError(f"Unsupported MQTT_URL: {url!r}")

    try:
        port = parts.port or _DEFAULT_PORTS[scheme]
    except ValueError as exc:
        raise ConfigurationError(f"Invalid port in MQTT_URL: {url!r}") from exc

    return BrokerAddress(
        host=parts.hostname,
        port=int(port),
        tls=_DEFAULT_PORTS[scheme] == 8883,
        username=urllib.parse.unquote(parts.username) if parts.username else None,
        password=urllib.parse.unquote(parts.password) if parts.password else None,
    )


def _default_client_factory(client_id: str) -> mqtt.Client:
    return mqtt.Client(
        callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
        client_id=client_id,
        clean_session=True,
    )


class PunchSubscriber:
    """Subscribes to the device topic and feeds every message to ``handler``.

    paho's network thread handles reconnects; the topic is re-subscribed on
    every (re)connect. A failing message is logged and the loop keeps going.
    """

    def __init__(
        self,
        broker: BrokerAddress,
        handler: MessageHandler,
        *,
        topic: str = DEFAULT_MQTT_TOPIC,
        client_id: str = "",
        client_factory: Callable[[str], Any] = _default_client_factory,
    ):
        self._broker = broker
        self._handler = handler
        self._topic = topic
        self._client = client_factory(client_id)

        if broker.username:
            self._client.username_pw_set(broker.username, broker.password)
        if broker.tls:
            self._client.tls_set()

        self._client.connect_timeout = MQTT_CONNECT_TIMEOUT_SECONDS
        self._client.reconnect_delay_set(
            min_delay=MQTT_RECONNECT_MIN_DELAY_SECONDS,
            max_delay=MQTT_RECONNECT_MAX_DELAY_SECONDS,
        )
        self._client.on_connect = self._on_connect
        self._client.on_disconnect = self._on_disconnect
        self._client.on_subscribe = self._on_subscribe
        self._client.on_message = self._on_message

    @property
    def broker(self) -> BrokerAddress:
        return self._broker

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def connected(self) -> bool:
        return bool(self._client.is_connected())

    def start(self) -> None:
        logger.info("connecting to MQTT broker %s", self._broker.public_url)
        self._client.connect_async(self._broker.host, self._broker.port)
        self._client.loop_start()

    def stop(self) -> None:
        self._client.disconnect()
        self._client.loop_stop()

    def _on_connect(self, client, userdata, flags, reason_code, properties=None) -> None:
        if reason_code.is_failure:
            logger.error("MQTT connect refused: %s", reason_code)
            return
        logger.info("MQTT connected: %s", self._broker.public_url)
        client.subscribe(self._topic, qos=MQTT_QOS)

    def _on_subscribe(self, client, userdata, mid, reason_codes, properties=None) -> None:
        for rc in reason_codes:
            if rc.is_failure:
                logger.error("MQTT subscribe error on %s: %s", self._topic, rc)
            else:
                logger.info("Subscribed: %s", self._topic)

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None) -> None:
        if reason_code.is_failure:
            logger.warning("MQTT disconnected unexpectedly: %s", reason_code)
        else:
            logger.info("MQTT disconnected")

    def _on_message(self, client, userdata, message) -> None:
        payload = message.payload
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8", errors="replace")
        try:
            self._handler(message.topic, payload)
        except Exception:
            logger.exception("failed to process MQTT message on %s", message.topic)
