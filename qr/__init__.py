"""
qr: QR code generation and per-user history.

Provides:
  • ``QRRenderer``: URL to PNG data URL (qrcode + Pillow)
  • ``QRService``: ownership-scoped generate / list / delete
  • ``/api/qr`` routes guarded by ``require_identity``
"""
