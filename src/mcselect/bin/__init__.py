"""Command line interface of the MC truth particle selection.

Usage Examples
--------------
Main CLI usage::

    mcselect -c config/select.yaml --source events.h5 --output selected.csv
    mcselect -c config/select.yaml --set tasks.mc_track_selector.eta_max=0.9
"""
