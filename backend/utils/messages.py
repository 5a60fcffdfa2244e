# backend/utils/messages.py
from config import settings

# User-facing texts, one catalog per locale. "en" is the fallback.
MESSAGES = {
    "en": {
        "app.running": "Shop API is running",
        "user.required": "Username, email, and password are required",
        "user.username_exists": "Username already exists",
        "user.email_exists": "Email already exists",
        "user.registered": "User registered successfully",
        "user.updated": "User updated successfully",
        "user.deleted": "User deleted successfully",
        "user.not_found": "User not found",
        "product.name_required": "Product name is required",
        "product.image_required": "Image URL is required",
        "product.price_invalid": "Price must be a positive number",
        "product.stock_invalid": "Stock must be a non-negative whole number",
        "product.name_exists": "A product with that name already exists",
        "product.created": "Product added successfully",
        "product.updated": "Product updated successfully",
        "product.deleted": "Product deleted successfully",
        "product.not_found": "Product not found",
        "category.name_required": "Category name is required",
        "category.name_exists": "A category with that name already exists",
        "category.not_found": "Category not found",
        "category.unknown_ids": "Unknown category ids: {ids}",
        "category.linked": "Product added to category",
        "category.already_linked": "Product is already in that category",
        "cart.quantity_invalid": "Quantity must be a positive whole number",
        "cart.insufficient_stock": "Insufficient stock. Available: {available}",
        "cart.item_added": "Item added to cart",
        "cart.item_updated": "Cart item updated",
        "cart.item_removed": "Cart item removed",
        "cart.item_not_found": "Cart item not found",
        "transaction.amount_invalid": "Total amount must be a non-negative number",
        "validation.missing_field": "Field '{field}' is required",
        "validation.invalid_field": "Field '{field}' has an invalid value",
        "validation.invalid_body": "Request body is not valid JSON",
        "error.duplicate": "A record with the same value already exists",
        "error.server": "Internal server error",
    },
    "id": {
        "app.running": "Shop API berjalan",
        "user.required": "Username, email, dan password harus diisi",
        "user.username_exists": "Username sudah digunakan",
        "user.email_exists": "Email sudah digunakan",
        "user.registered": "Pengguna berhasil didaftarkan",
        "user.updated": "Pengguna berhasil diperbarui",
        "user.deleted": "Pengguna berhasil dihapus",
        "user.not_found": "Pengguna tidak ditemukan",
        "product.name_required": "Nama produk harus diisi",
        "product.image_required": "URL gambar harus diisi",
        "product.price_invalid": "Harga harus berupa angka positif",
        "product.stock_invalid": "Stok harus berupa angka non-negatif",
        "product.name_exists": "Produk dengan nama tersebut sudah ada",
        "product.created": "Produk berhasil ditambahkan",
        "product.updated": "Produk berhasil diperbarui",
        "product.deleted": "Produk berhasil dihapus",
        "product.not_found": "Produk tidak ditemukan",
        "category.name_required": "Nama kategori harus diisi",
        "category.name_exists": "Kategori dengan nama tersebut sudah ada",
        "category.not_found": "Kategori tidak ditemukan",
        "category.unknown_ids": "ID kategori tidak dikenal: {ids}",
        "category.linked": "Produk ditambahkan ke kategori",
        "category.already_linked": "Produk sudah ada di kategori tersebut",
        "cart.quantity_invalid": "Jumlah harus berupa bilangan bulat positif",
        "cart.insufficient_stock": "Stok tidak mencukupi. Tersedia: {available}",
        "cart.item_added": "Barang ditambahkan ke keranjang",
        "cart.item_updated": "Barang di keranjang diperbarui",
        "cart.item_removed": "Barang dihapus dari keranjang",
        "cart.item_not_found": "Barang di keranjang tidak ditemukan",
        "transaction.amount_invalid": "Total harus berupa angka non-negatif",
        "validation.missing_field": "Kolom '{field}' harus diisi",
        "validation.invalid_field": "Nilai kolom '{field}' tidak valid",
        "validation.invalid_body": "Isi permintaan bukan JSON yang valid",
        "error.duplicate": "Data dengan nilai yang sama sudah ada",
        "error.server": "Terjadi kesalahan pada server",
    },
}


def t(key: str, **params) -> str:
    catalog = MESSAGES.get((settings.LOCALE or "en").lower(), MESSAGES["en"])
    template = catalog.get(key) or MESSAGES["en"][key]
    return template.format(**params) if params else template
