"""Hotel reservation IVR — Twilio speech webhooks over a CSV room catalog."""
