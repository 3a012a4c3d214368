"""
cxplain/core — Core types, configuration, exceptions and validators
"""
