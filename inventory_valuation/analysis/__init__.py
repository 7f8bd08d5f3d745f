'''
Inventory valuation analysis utilities.

Import directly from the submodules (run.py imports insights, so this package
does not import them eagerly):
  from inventory_valuation.analysis.batch_valuation import batch_valuation
  from inventory_valuation.analysis.insights import build_insights
  from inventory_valuation.analysis.sensitivity import SensitivityTableBuilder
'''
