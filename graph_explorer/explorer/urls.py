from django.urls import path

from . import views

app_name = "explorer"

urlpatterns = [
    path("", views.index, name="index"),
    path("api/map/new/", views.new_map_api, name="map-new-api"),
    path("api/map/import/", views.import_map_api, name="map-import-api"),
    path("api/map/<str:map_id>/state/", views.map_state_api, name="map-state-api"),
    path("api/map/<str:map_id>/action/", views.map_action_api, name="map-action-api"),
    path("api/map/<str:map_id>/export/", views.export_map_api, name="map-export-api"),
    path("api/map/<str:map_id>/render/", views.render_map_api, name="map-render-api"),
]
