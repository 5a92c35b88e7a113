# chantier_planning/urls.py
from django.contrib import admin
from django.urls import path


urlpatterns = [
    # Phases and their history are edited through the admin;
    # the planning UI talks to apps.planning.application directly.
    path('admin/', admin.site.urls),
]
