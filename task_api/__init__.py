"""Serverless CRUD handlers for tasks stored in DynamoDB."""

__version__ = "0.1.0"
