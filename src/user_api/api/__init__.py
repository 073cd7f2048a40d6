"""HTTP-level helpers shared by routers."""
