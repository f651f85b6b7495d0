from django.urls import path

from . import views

app_name = 'reports'

urlpatterns = [
    # GET /api/reports/dashboard/              - Dashboard counters
    path('dashboard/', views.dashboard, name='dashboard'),
    # GET /api/reports/{type}/                 - Report as JSON
    path('<str:report_type>/', views.report, name='report'),
    # GET /api/reports/{type}/export/          - Report as CSV
    path('<str:report_type>/export/', views.export_report, name='export'),
]
