"""Kube Context Gateway: per-request, multi-cluster read access to pods, logs, and namespaces."""
