from .registry import check_marketplace, load_marketplace, save_marketplace, sync_versions

__all__ = ["check_marketplace", "load_marketplace", "save_marketplace", "sync_versions"]
