"""IP tracker: resolve client IPs behind proxies and relay alerts to Telegram."""
