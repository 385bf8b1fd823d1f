"""
Privacy Proxy - a data-redacting reverse proxy.

By default every value in a request's querystring and JSON body is redacted
while the shape of the data is preserved. Operators whitelist data by
location ($.user.id, $.items[*].sku) or by querystring key, per method and
path, in a JSON config file.
"""

__version__ = "0.1.0"
