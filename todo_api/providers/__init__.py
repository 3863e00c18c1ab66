"""Swappable backend providers, selected through Settings."""
