from .product import Product
from .product_manager import ProductManager
from .storage_service import StorageService, InventorySnapshot

__all__ = ["Product", "ProductManager", "StorageService", "InventorySnapshot"]
