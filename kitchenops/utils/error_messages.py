"""
Centralized Error Messages

Single source of truth for user-facing messages returned by the API.

Usage:
    from kitchenops.utils.error_messages import ErrorMessages as EM

    return APIResponse.error(EM.INTERNAL_ERROR, status_code=500)
"""


class ErrorMessages:
    """User-facing error messages - never contain HTML or special characters"""

    # ==================== GENERIC ====================
    VALIDATION_FAILED = "Validation failed."
    METHOD_NOT_ALLOWED = "Method not allowed for this endpoint."
    INTERNAL_ERROR = "An unexpected error occurred. Please try again."
    SERVICE_UNAVAILABLE = "Service temporarily unavailable. Please try again shortly."
    RATE_LIMITED = "Too many requests. Please slow down and try again."
    CSRF_FAILED = "Your session expired or this form is out of date. Refresh and try again."

    # ==================== EXPORTS ====================
    EXPORT_WRITE_FAILED = "Could not write export file: {reason}"


class SuccessMessages:
    PRODUCT_CREATED = "Product created successfully."
    PRODUCT_UPDATED = "Product updated successfully."
    PRODUCT_DELETED = "Product deleted successfully."

    MATERIAL_CREATED = "Raw material created successfully."
    MATERIAL_UPDATED = "Raw material updated successfully."
    MATERIAL_DELETED = "Raw material deleted successfully."

    RECIPE_CREATED = "Recipe created successfully."
    RECIPE_UPDATED = "Recipe updated successfully."
    RECIPE_DELETED = "Recipe deleted successfully."

    PRODUCTION_LOGGED = "Production logged and stock updated."

    LOSS_LOGGED = "Loss logged successfully."
    LOSS_DELETED = "Loss log deleted successfully."

    CLIENT_CREATED = "Client created successfully."
    CLIENT_UPDATED = "Client updated successfully."
    CLIENT_DELETED = "Client deleted successfully."

    ORDER_CREATED = "Order created successfully."
    ORDER_UPDATED = "Order updated successfully."
    ORDER_DELETED = "Order deleted successfully."

    VENDOR_CREATED = "Vendor created successfully."
    VENDOR_UPDATED = "Vendor updated successfully."
    VENDOR_DELETED = "Vendor deleted successfully."

    GRN_CREATED = "GRN {grn_number} created successfully."
    GRN_RECEIVED = "GRN {grn_number} received; stock updated."

    TRANSPORT_LOGGED = "Transport run logged successfully."
    TRANSPORT_DELETED = "Transport run deleted successfully."
    DELIVERY_UPDATED = "Delivery status updated."


EM = ErrorMessages
SM = SuccessMessages
