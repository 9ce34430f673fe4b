"""
Health checks and monitoring with Prometheus metrics
"""
import time

import psutil
import structlog
from fastapi.responses import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

logger = structlog.get_logger()

# Prometheus metrics
REQUEST_COUNT = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
REQUEST_DURATION = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])
QUESTION_GENERATION_REQUESTS = Counter(
    'question_generation_total', 'Questions served, by source and fallback reason', ['source', 'reason']
)


class HealthChecker:
    def __init__(self):
        self.start_time = time.time()

    def check_model(self, service) -> dict:
        """Credential presence only; no network call is made"""
        if service.client.is_configured():
            return {
                "status": "healthy",
                "message": f"Model client configured ({service.client.settings.question_model})"
            }
        return {
            "status": "degraded",
            "message": "OPENAI_API_KEY missing; serving curated questions only"
        }

    def check_history(self, service) -> dict:
        """Round-trip a probe entry through the history store"""
        probe_topic = "__health_check__"
        try:
            service.history.record(probe_topic, "probe")
            value = service.history.recent(probe_topic, 1)
            service.history.clear(probe_topic)
            if value == ["probe"]:
                return {
                    "status": "healthy",
                    "message": f"{type(service.history).__name__} operations successful"
                }
            return {
                "status": "degraded",
                "message": "History store did not return the probe entry"
            }
        except Exception as e:
            logger.error(f"History health check failed: {e}")
            return {
                "status": "degraded",
                "message": f"History store failed: {str(e)}"
            }

    def get_system_metrics(self) -> dict:
        """Get system resource metrics"""
        try:
            memory = psutil.virtual_memory()
            return {
                "cpu_percent": psutil.cpu_percent(interval=None),
                "memory_percent": memory.percent,
                "memory_available_gb": round(memory.available / (1024**3), 2),
                "uptime_seconds": time.time() - self.start_time
            }
        except Exception as e:
            logger.error(f"System metrics collection failed: {e}")
            return {"error": str(e)}

    def get_health_status(self, service) -> dict:
        """Get overall health status"""
        checks = {
            "model": self.check_model(service),
            "history": self.check_history(service),
        }

        degraded = [name for name, check in checks.items() if check["status"] != "healthy"]
        return {
            "status": "healthy" if not degraded else "degraded",
            "timestamp": time.time(),
            "checks": checks,
            "system_metrics": self.get_system_metrics(),
            "degraded_components": degraded
        }


# Global health checker instance
health_checker = HealthChecker()


def get_metrics():
    """Get Prometheus metrics"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
