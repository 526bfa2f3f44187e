"""
Request validators: turn raw JSON or form payloads into typed schemas

Strings are trimmed and quote-stripped, integers use base-10 parsing,
booleans accept true/false or "true"/"false". Update validators only carry
keys that were present in the payload, so an omitted field is left alone
while an empty nullable field is cleared to None.
"""
