from csssync.patch.patcher import RulePatcher, apply_property_changes, write_stylesheet

__all__ = ["RulePatcher", "apply_property_changes", "write_stylesheet"]
