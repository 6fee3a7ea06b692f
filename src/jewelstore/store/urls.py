"""URL patterns for the storefront."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    # Catalog
    path("", views.CollectionListView.as_view(), name="collections"),
    path("collections/<int:pk>/", views.ProductListView.as_view(source="collection"), name="collection-products"),
    path("categories/<int:pk>/", views.ProductListView.as_view(source="category"), name="category-products"),
    path("enquiry/", views.EnquiryView.as_view(), name="enquiry"),

    # Cart
    path("cart/", views.CartView.as_view(), name="cart"),
    path("cart/add/", views.AddToCartView.as_view(), name="cart-add"),
    path("cart/quantity/", views.CartQuantityView.as_view(), name="cart-quantity"),
    path("cart/remove/", views.CartRemoveView.as_view(), name="cart-remove"),
    path("cart/coupon/apply/", views.ApplyCouponView.as_view(), name="coupon-apply"),
    path("cart/coupon/remove/", views.RemoveCouponView.as_view(), name="coupon-remove"),
    path("checkout/", views.CheckoutView.as_view(), name="checkout"),

    # Custom orders
    path("custom-order/", views.CustomOrderView.as_view(), name="custom-order"),

    # Customer account
    path("account/orders/", views.OrderListView.as_view(), name="orders"),
    path("account/orders/<int:pk>/", views.OrderDetailView.as_view(), name="order-detail"),
    path("account/orders/<int:pk>/cancel/", views.OrderCancelView.as_view(), name="order-cancel"),
    path("account/custom-orders/", views.MyCustomOrdersView.as_view(), name="my-custom-orders"),
    path("account/wishlist/", views.WishlistView.as_view(), name="wishlist"),
    path("account/wishlist/add/", views.WishlistAddView.as_view(), name="wishlist-add"),
    path("account/wishlist/remove/", views.WishlistRemoveView.as_view(), name="wishlist-remove"),
    path("account/wishlist/move-to-cart/", views.WishlistMoveToCartView.as_view(), name="wishlist-move"),

    # Sign-in
    path("signin/", views.SignInView.as_view(), name="signin"),
    path("signup/", views.SignUpView.as_view(), name="signup"),
    path("signout/", views.SignOutView.as_view(), name="signout"),
]
