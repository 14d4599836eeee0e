"""Zimbra JSON-SOAP wire format: envelope codec, query language, code tables, wire models and mapping."""
