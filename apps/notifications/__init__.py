"""
Notifications app.

Composes SMS texts for farmers (delivery recorded, payment processed,
welcome on registration) and relays them through the SMS provider chosen
in SystemSettings. Sending is best-effort: every entry point returns a
result dict and never raises into the business operation that triggered it.
"""
