"""Access to the TFS items API."""

from tfsgit.remote.classifier import classify
from tfsgit.remote.client import TFSClient
from tfsgit.remote.urls import download_url, listing_url

__all__ = ["TFSClient", "classify", "download_url", "listing_url"]
