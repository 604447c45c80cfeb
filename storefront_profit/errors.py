"""
Paket genelinde kullanılan hata sınıfları.
"""
from __future__ import annotations


class StorefrontError(Exception):
    """Tüm paket hatalarının ortak tabanı."""


class RecordFormatError(StorefrontError, ValueError):
    """Kalıcı bir kayıt beklenen şekle uymuyor."""


class LedgerError(RecordFormatError):
    """Yerel kasa defteri (cashier-sales) okunamadı veya bozuk."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class InvalidQuantityError(StorefrontError, ValueError):
    """Adet sıfır veya negatif."""

    def __init__(self, quantity):
        super().__init__(f"Adet sıfırdan büyük olmalı: {quantity}")
        self.quantity = quantity


class InsufficientStockError(StorefrontError):
    """Sepete eklenmek istenen adet stoktan fazla."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Yetersiz stok ({product_id}): istenen {requested}, mevcut {available}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class EmptyCartError(StorefrontError):
    """Boş sepetten sipariş / satış oluşturulamaz."""
