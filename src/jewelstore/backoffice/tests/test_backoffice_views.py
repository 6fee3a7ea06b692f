"""Tests for back-office views."""

from unittest.mock import Mock, patch

import pytest
from django.contrib.messages import get_messages

from jewelstore.api.auth import NormalizedLogin
from jewelstore.api.client import BackendError
from jewelstore.api.schemes import Scheme
from jewelstore.backoffice import views


def flashed(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


class TestLoginView:
    """Tests for admin login."""

    def test_success_sets_admin_session(self, client):
        login = NormalizedLogin(token="admin-tok", name="Meena", email="meena@example.com", message="Login successful")
        with patch("jewelstore.api.auth.admin_login", return_value=login) as admin_login:
            response = client.post("/backoffice/login/", {"username": "meena@example.com", "password": "pw"})

        admin_login.assert_called_once_with("meena@example.com", "pw")
        assert response.status_code == 302
        assert response.url == "/backoffice/"
        auth = response.wsgi_request.admin_auth
        assert auth.token == "admin-tok"
        assert auth.name == "Meena"
        assert not response.wsgi_request.customer_auth.is_authenticated

    def test_invalid_credentials(self, client):
        with patch("jewelstore.api.auth.admin_login", side_effect=BackendError("Invalid credentials", 401)):
            response = client.post("/backoffice/login/", {"username": "meena", "password": "bad"})

        assert response.status_code == 200
        assert flashed(response) == ["Invalid credentials"]

    def test_signed_in_admin_skips_login(self, admin_client):
        response = admin_client.get("/backoffice/login/")

        assert response.status_code == 302
        assert response.url == "/backoffice/"

    def test_logout(self, admin_client):
        response = admin_client.post("/backoffice/logout/")

        assert response.url == "/backoffice/login/"
        assert not response.wsgi_request.admin_auth.is_authenticated


class TestDashboard:
    def test_renders_analytics(self, admin_client):
        with patch("jewelstore.api.admin_reports.analytics", return_value={"total_orders": 42}) as analytics:
            response = admin_client.get("/backoffice/")

        analytics.assert_called_once_with("admin-token")
        assert response.status_code == 200
        assert response.context["analytics"] == {"total_orders": 42}

    def test_backend_down_degrades(self, admin_client):
        response = admin_client.get("/backoffice/")

        assert response.status_code == 200
        assert response.context["analytics"] == {}


class TestOrders:
    def test_filter_by_status(self, admin_client):
        result = {
            "orders": [{"id": 1, "status": "pending"}, {"id": 2, "status": "shipped"}],
            "status_counts": {"pending": 1, "shipped": 1},
        }
        with patch("jewelstore.api.admin_sales.list_orders", return_value=result):
            response = admin_client.get("/backoffice/orders/?status=shipped")

        assert [order["id"] for order in response.context["orders"]] == [2]
        assert response.context["current_status"] == "shipped"

    def test_change_status(self, admin_client):
        with patch("jewelstore.api.admin_sales.change_order_status", return_value={"success": True}) as change:
            response = admin_client.post("/backoffice/orders/5/status/", {"status": "shipped"})

        change.assert_called_once_with("admin-token", 5, "shipped")
        assert response.url == "/backoffice/orders/5/"
        assert "Order marked shipped" in flashed(response)

    def test_invalid_status_not_sent(self, admin_client):
        with patch("jewelstore.api.admin_sales.change_order_status") as change:
            admin_client.post("/backoffice/orders/5/status/", {"status": "lost"})

        change.assert_not_called()

    def test_order_without_customer_name(self, admin_client):
        result = {"orders": [{"id": 2, "status": "shipped", "user": {"name": "Asha"}}], "status_counts": {}}
        with patch("jewelstore.api.admin_sales.list_orders", return_value=result):
            response = admin_client.get("/backoffice/orders/")

        assert response.status_code == 200
        assert "Asha" in response.content.decode()

    def test_order_with_only_customer_name(self, admin_client):
        result = {"orders": [{"id": 3, "status": "pending", "customer_name": "Ravi", "total_amount": "1500"}]}
        with patch("jewelstore.api.admin_sales.list_orders", return_value=result):
            response = admin_client.get("/backoffice/orders/")

        content = response.content.decode()
        assert "Ravi" in content
        assert "₹1500.00" in content

    def test_order_detail_sparse_record(self, admin_client):
        with patch("jewelstore.api.admin_sales.get_order", return_value={"id": 5, "status": "pending", "items": [{"quantity": 1}]}):
            response = admin_client.get("/backoffice/orders/5/")

        assert response.status_code == 200

    def test_order_detail_404(self, admin_client):
        with patch("jewelstore.api.admin_sales.get_order", return_value={}):
            response = admin_client.get("/backoffice/orders/5/")

        assert response.status_code == 404


class TestResourceViews:
    """Tests for the generic resource list, form and delete views."""

    def test_coupon_list_rows(self, admin_client):
        coupons = [{"id": 3, "coupon_code": "GOLD10", "discount_type": "percentage", "value": "10",
                    "min_order_amount": "5000", "status": 1}]
        with patch.object(views.Coupons, "list_func", staticmethod(Mock(return_value=coupons))):
            response = admin_client.get("/backoffice/coupons/")

        assert response.status_code == 200
        assert response.context["rows"] == [(3, ["GOLD10", "percentage", "10", "5000", 1])]
        assert "/backoffice/coupons/3/edit/" in response.content.decode()

    def test_create_coupon(self, admin_client):
        create = Mock(return_value={"success": True})
        with patch.object(views.Coupons, "create_func", staticmethod(create)):
            response = admin_client.post("/backoffice/coupons/new/", {
                "coupon_code": "flat500",
                "discount_type": "flat",
                "value": "500",
                "min_order_amount": "2000",
                "status": "1",
            })

        assert response.status_code == 302
        assert response.url == "/backoffice/coupons/"
        token, payload = create.call_args.args
        assert token == "admin-token"
        assert payload["coupon_code"] == "FLAT500"
        assert "Coupon created" in flashed(response)

    def test_update_loads_initial(self, admin_client):
        record = {"id": 4, "name": "Bridal", "description": "Wedding sets", "status": 1}
        with patch.object(views.Collections, "get_func", staticmethod(Mock(return_value=record))):
            response = admin_client.get("/backoffice/collections/4/edit/")

        assert response.status_code == 200
        assert response.context["form"].initial["name"] == "Bridal"
        assert response.context["object_id"] == 4

    def test_update_sends_upload(self, admin_client):
        update = Mock(return_value={"success": True})
        with patch.object(views.Categories, "update_func", staticmethod(update)):
            admin_client.post("/backoffice/categories/4/edit/", {"name": "Rings", "status": "1"})

        token, object_id, fields, image = update.call_args.args
        assert (token, object_id) == ("admin-token", 4)
        assert fields["name"] == "Rings"
        assert image is None

    def test_update_post_does_not_refetch(self, admin_client):
        get = Mock(side_effect=BackendError("Not found", 404))
        update = Mock(return_value={"success": True})
        with patch.object(views.Collections, "get_func", staticmethod(get)), \
                patch.object(views.Collections, "update_func", staticmethod(update)):
            response = admin_client.post("/backoffice/collections/4/edit/", {"name": "Bridal", "status": "1"})

        get.assert_not_called()
        assert update.call_args.args[:2] == ("admin-token", 4)
        assert response.url == "/backoffice/collections/"

    def test_failed_save_rerenders(self, admin_client):
        create = Mock(return_value={"success": False, "message": "Name taken"})
        with patch.object(views.Banners, "create_func", staticmethod(create)):
            response = admin_client.post("/backoffice/banners/new/", {"title": "Diwali", "status": "1"})

        assert response.status_code == 200
        assert "Name taken" in flashed(response)

    def test_delete(self, admin_client):
        delete = Mock(return_value={"success": True})
        with patch.object(views.Products, "delete_func", staticmethod(delete)):
            response = admin_client.post("/backoffice/products/9/delete/")

        delete.assert_called_once_with("admin-token", 9)
        assert response.url == "/backoffice/products/"

    def test_product_sizes_initial(self, admin_client):
        record = {"id": 9, "name": "Ring", "sizes": [{"size": "12", "quantity": 4}, {"size": "14", "quantity": 1}]}
        with patch.object(views.Products, "get_func", staticmethod(Mock(return_value=record))):
            response = admin_client.get("/backoffice/products/9/edit/")

        assert response.context["form"].initial["sizes"] == "12:4\n14:1"


class TestSchemeEdit:
    def scheme(self):
        return Scheme(id=2, name="Swarna", timeline="11 months", min_amount=1000, status=1, is_popular=0,
                      points=["Bonus month"])

    def test_initial_from_scheme(self, admin_client):
        with patch("jewelstore.api.schemes.list_schemes", return_value=[self.scheme()]):
            response = admin_client.get("/backoffice/schemes/2/edit/")

        assert response.context["form"].initial["points"] == "Bonus month"

    def test_unknown_scheme(self, admin_client):
        with patch("jewelstore.api.schemes.list_schemes", return_value=[self.scheme()]):
            response = admin_client.get("/backoffice/schemes/9/edit/")

        assert response.status_code == 404

    def test_update(self, admin_client):
        with patch("jewelstore.api.schemes.list_schemes", return_value=[self.scheme()]), \
                patch("jewelstore.api.schemes.update_scheme", return_value="Scheme updated") as update:
            response = admin_client.post("/backoffice/schemes/2/edit/", {
                "name": "Swarna Plus",
                "timeline": "12 months",
                "min_amount": "1500",
                "points": "Bonus month\nNo making charges",
                "status": "1",
                "is_popular": "on",
            })

        assert response.url == "/backoffice/schemes/"
        token, scheme_id, scheme = update.call_args.args
        assert (token, scheme_id) == ("admin-token", 2)
        assert scheme.name == "Swarna Plus"
        assert scheme.points == ["Bonus month", "No making charges"]
        assert scheme.is_popular == 1

    def test_update_without_reloading_list(self, admin_client):
        with patch("jewelstore.api.schemes.list_schemes") as list_schemes, \
                patch("jewelstore.api.schemes.update_scheme", return_value="Scheme updated") as update:
            response = admin_client.post("/backoffice/schemes/2/edit/", {
                "name": "Swarna", "timeline": "11 months", "min_amount": "1000", "status": "1",
            })

        list_schemes.assert_not_called()
        assert update.call_args.args[2].id == 2
        assert response.url == "/backoffice/schemes/"


class TestCustomOrderDetail:
    def test_sparse_record_renders(self, admin_client):
        with patch("jewelstore.api.admin_sales.get_custom_order", return_value={"id": 6, "status": "pending"}):
            response = admin_client.get("/backoffice/custom-orders/6/")

        assert response.status_code == 200
        assert response.context["form"].initial["status"] == "pending"

    def test_update_does_not_refetch(self, admin_client):
        with patch("jewelstore.api.admin_sales.get_custom_order") as get_order, \
                patch("jewelstore.api.admin_sales.update_custom_order", return_value={"success": True}) as update:
            response = admin_client.post("/backoffice/custom-orders/6/", {"status": "in_progress"})

        get_order.assert_not_called()
        update.assert_called_once_with("admin-token", 6, {"status": "in_progress"})
        assert response.url == "/backoffice/custom-orders/6/"


class TestUsers:
    def test_search(self, admin_client):
        users = [
            {"id": 1, "name": "Asha", "email": "asha@example.com", "mobile": "9000000001", "status": 1},
            {"id": 2, "name": "Ravi", "email": "ravi@example.com", "mobile": "9000000002", "status": 0},
        ]
        with patch("jewelstore.api.admin_users.list_users", return_value=users):
            response = admin_client.get("/backoffice/users/?search=RAVI")

        assert [user["id"] for user in response.context["users"]] == [2]

    def test_block_user(self, admin_client):
        with patch("jewelstore.api.admin_users.update_user_status", return_value={"success": True}) as update:
            response = admin_client.post("/backoffice/users/4/status/", {"status": "0"})

        update.assert_called_once_with("admin-token", 4, 0)
        assert "User blocked" in flashed(response)

    @pytest.mark.parametrize("tab", ["orders", "wallet", "vault", "bogus"])
    def test_detail_tabs(self, admin_client, tab):
        response = admin_client.get(f"/backoffice/users/4/?tab={tab}")

        assert response.status_code == 200
        assert response.context["tab"] == ("orders" if tab == "bogus" else tab)

    def test_sparse_user_records_render(self, admin_client):
        orders = Mock(return_value={"user": {"email": "asha@example.com"}, "orders": [{"id": 3, "total_amount": "900"}]})
        with patch.dict(views.UserDetailView.tabs, {"orders": ("Orders", orders)}):
            response = admin_client.get("/backoffice/users/4/?tab=orders")

        content = response.content.decode()
        assert response.status_code == 200
        assert "Customer" in content
        assert "₹900.00" in content

    def test_scheme_payments_as_plain_list(self, admin_client):
        schemes = Mock(return_value={"schemes": [{"id": 1, "name": "Swarna"}]})
        payments = [{"amount": "500", "status": "paid", "order_id": "order_77"}]
        with patch.dict(views.UserDetailView.tabs, {"schemes": ("Schemes", schemes)}), \
                patch("jewelstore.api.admin_users.user_scheme_payments", return_value=payments):
            response = admin_client.get("/backoffice/users/4/?tab=schemes&scheme=1")

        assert response.status_code == 200
        assert "order_77" in response.content.decode()

    def test_wallet_debit(self, admin_client):
        with patch("jewelstore.api.wallet.admin_debit_wallet", return_value={"success": True}) as debit:
            response = admin_client.post("/backoffice/users/4/wallet/debit/", {"amount": "250.50", "description": "Refund"})

        args = debit.call_args.args
        assert args[:2] == ("admin-token", 4)
        assert str(args[2]) == "250.50"
        assert response.url == "/backoffice/users/4/?tab=wallet"

    def test_wallet_debit_rejects_zero(self, admin_client):
        with patch("jewelstore.api.wallet.admin_debit_wallet") as debit:
            response = admin_client.post("/backoffice/users/4/wallet/debit/", {"amount": "0"})

        debit.assert_not_called()
        assert "Enter a valid amount" in flashed(response)


class TestSettings:
    def test_saves_one_section(self, admin_client):
        current = {"general": {"making_charge": 12}, "gold_api": {"provider": "metals"}}
        with patch("jewelstore.api.admin_reports.get_settings", return_value=current), \
                patch("jewelstore.api.admin_reports.update_settings", return_value={"success": True}) as update:
            response = admin_client.post("/backoffice/settings/", {
                "section_name": "general",
                "general-making_charge": "15",
            })

        update.assert_called_once_with("admin-token", "general", {"making_charge": 15})
        assert "Settings saved" in flashed(response)

    def test_unknown_section(self, admin_client):
        with patch("jewelstore.api.admin_reports.update_settings") as update:
            response = admin_client.post("/backoffice/settings/", {"section_name": "bogus"})

        update.assert_not_called()
        assert "Unknown settings section" in flashed(response)


class TestNotifications:
    def test_send_to_everyone(self, admin_client):
        with patch("jewelstore.api.admin_content.send_notification", return_value={"success": True}) as send:
            response = admin_client.post("/backoffice/notifications/", {"title": "Offer", "body": "Gold rate down"})

        send.assert_called_once_with("admin-token", "Offer", "Gold rate down", user_ids=None)
        assert response.url == "/backoffice/notifications/"
