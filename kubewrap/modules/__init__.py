"""Kubewrap modules."""
