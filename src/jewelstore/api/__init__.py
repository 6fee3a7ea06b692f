"""REST backend client.

Every record the storefront shows is owned by the remote backend. The modules
in this package are thin wrappers, one per backend area, around the shared
httpx client in ``client``.
"""
