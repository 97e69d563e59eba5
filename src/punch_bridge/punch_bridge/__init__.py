"""Punch Bridge package.

Bridges biometric attendance terminals (MQTT) to a durable punch log with a
token-protected read API. Organized by feature modules (punches, mqtt, ...)
with a thin Flask controller layer over service/repository layers.
"""
