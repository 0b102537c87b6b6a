from playbook.facade.analytics_facade import AnalyticsFacade, PlaybookView

__all__ = ["AnalyticsFacade", "PlaybookView"]
