"""Exceptions raised while building or running queries."""


class QueryBuilderError(Exception):
    """Base class for every error raised by clausework."""


class ConfigurationError(QueryBuilderError, RuntimeError):
    """A query or connection is missing something it needs (target table, executor, URL)."""


class InvalidArgumentError(QueryBuilderError, ValueError):
    """A builder received a value it cannot render (negative LIMIT, empty identifier, ...)."""


class TransactionError(QueryBuilderError):
    """Custom exception for transaction-related errors"""
