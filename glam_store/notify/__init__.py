from .sms import SmsError, SmsResult, send_sms

__all__ = ["SmsError", "SmsResult", "send_sms"]
