"""
Entities package.

Each subdirectory represents one stage of the pool capacity advisor:
- query_extractor/: Pulls validated KQL queries out of model output
- query_executor/: Runs KQL against Kusto and renders bounded result tables
- kusto_analysis/: Deterministic analysis functions over rendered tables
- pool_optimizer/: Agent, prompts and analyzer wiring the stages together
- shared/: Kusto client, table text format and protocol interfaces
"""
