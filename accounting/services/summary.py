from accounting.schemas.accounting import LedgerTotals, ProjectSnapshot, ProjectTotals


def project_totals(snapshot: ProjectSnapshot) -> ProjectTotals:
    costs = sum(cost.amount for cost in snapshot.costs)
    sales = sum(sale.price for sale in snapshot.sales)
    return ProjectTotals(costs=costs, sales=sales, profit=sales - costs)


def ledger_totals(transactions) -> LedgerTotals:
    revenue = 0.0
    expense = 0.0
    pending = 0
    for transaction in transactions:
        if transaction.type == "revenue":
            revenue += transaction.amount
        else:
            expense += transaction.amount
        if not transaction.approved:
            pending += 1
    return LedgerTotals(
        revenue=revenue,
        expense=expense,
        net=revenue - expense,
        pending_approval=pending,
    )
