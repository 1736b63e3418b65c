"""Service exceptions"""


class DatabaseNotConnected(RuntimeError):
    """Raised when a write is attempted without a Supabase client"""


class ExportError(Exception):
    """Raised when a QR panel or flyer cannot be rasterized"""
