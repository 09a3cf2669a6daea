"""Namespace for search; it holds no modules yet."""