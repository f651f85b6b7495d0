"""Derived reports over milk deliveries and the dashboard summary."""
