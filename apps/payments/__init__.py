"""
Payments app.

One Payment row per (farmer, calendar month) accumulates the liters and
amount of that farmer's deliveries. Operators settle pending rows one at a
time or in bulk; the farmer gets an SMS for every settled row.
"""
