"""
Core topology model: types, store, scoping, filtering and view state.
"""
