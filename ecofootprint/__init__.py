"""ecofootprint - product carbon footprint estimation service"""

__version__ = "0.1.0"
