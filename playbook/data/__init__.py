from playbook.data.csv_loader import bars_from_frame, load_bars_csv

__all__ = ["bars_from_frame", "load_bars_csv"]
