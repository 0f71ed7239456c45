"""
Analisi pallet da testo incollato dal programma di carico.

Questo modulo contiene la pipeline deterministica:
- Parser: testo tab-delimitato → header + record
- Aggregator: record → totali, conteggi per tipo, riepilogo per cliente
"""
