"""Offline data-preparation scripts for the CineMap filming-location globe."""

__version__ = "0.1.0"
