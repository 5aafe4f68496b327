"""
Chain-specific entity records and contexts.

- chains.evm: EvmCtx (block, transactions, events, call traces)
- chains.sui: SuiCtx (transaction, events, call traces and arguments)
- chains.aptos: AptosCtx (block, transactions, events, call traces and arguments)
"""
