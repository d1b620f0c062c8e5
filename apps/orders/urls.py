from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # Order ViewSet routes
    # GET    /api/orders/                      - List orders
    # POST   /api/orders/                      - Create order (with approval slots)
    # GET    /api/orders/{id}/                 - Get order with approvals
    # PATCH  /api/orders/{id}/                 - Update description
    # DELETE /api/orders/{id}/                 - Delete pending order

    # Custom order actions
    # POST   /api/orders/{id}/approve/         - Approve or reject at own level
    # GET    /api/orders/{id}/approval_status/ - Approval progress

    # Required approval levels for an amount
    path('approval-levels/<str:amount>/', views.approval_levels, name='approval-levels'),

    # Include router URLs
    path('', include(router.urls)),
]
