from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin
    path('admin/', admin.site.urls),

    # Swap / feedback API
    path('api/', include('swaps.api_urls')),

    # Skill directory API
    path('api/', include('skills.urls')),

    # Accounts API (register, login, ban management)
    path('api/', include('accounts.urls')),
]
