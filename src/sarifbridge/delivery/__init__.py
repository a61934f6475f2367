"""Delivery exports."""

from sarifbridge.delivery.bitbucket import BitbucketReportsClient

__all__ = ["BitbucketReportsClient"]
