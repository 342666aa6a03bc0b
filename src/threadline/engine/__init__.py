"""
Rule dispatch and result aggregation.

Entry points live in threadline.engine.dispatcher (dispatch) and
threadline.engine.aggregator (aggregate).
"""
