"""Headless layout model and the combo-box widgets built on it."""

__all__ = ["layout", "custom_fill_combo_box", "left_label_combo_box"]