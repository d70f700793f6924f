from ...services.dashboard_service import DashboardService
from ...utils.api_responses import APIResponse
from . import dashboard_bp


@dashboard_bp.route('', methods=['GET'])
def dashboard_stats():
    return APIResponse.success(DashboardService.get_stats())
