"""End-to-end tests for the click commands against the seeded store."""

from click.testing import CliRunner

from pos.infrastructure.cli.main import cli


def _run(*args: str, input: str | None = None, env: dict | None = None):
    return CliRunner().invoke(cli, list(args), input=input, env=env)


class TestProductCommands:

    def test_list(self):
        result = _run("product", "list")
        assert result.exit_code == 0
        assert "Coca Cola 330ml" in result.output
        assert "$1.56" in result.output
        assert "Bulk" in result.output

    def test_search(self):
        result = _run("product", "search", "chips")
        assert result.exit_code == 0
        assert "Lay's Chips Original" in result.output
        assert "Coca Cola" not in result.output

    def test_add(self):
        result = _run("product", "add", "--name", "Gum", "--cost", "0.50",
                      "--stock", "40", "--markup", "1.0")
        assert result.exit_code == 0
        assert "Product P006 'Gum' added at $1.00" in result.output

    def test_add_perishable_without_date_fails(self):
        result = _run("product", "add", "--kind", "perishable", "--name", "Eggs",
                      "--cost", "1", "--stock", "5", "--shelf-life", "10")
        assert result.exit_code == 1
        assert "expiration date" in result.output


class TestCustomerCommands:

    def test_list_by_tier(self):
        result = _run("customer", "list", "--tier", "vip")
        assert result.exit_code == 0
        assert "Bob Johnson" in result.output
        assert "John Doe" not in result.output


class TestReportCommands:

    def test_financial(self):
        result = _run("report", "financial")
        assert result.exit_code == 0
        assert "Profit Margin: 37.8%" in result.output

    def test_low_stock(self):
        result = _run("report", "low-stock")
        assert result.exit_code == 0
        assert "Chocolate Bar" in result.output

    def test_sales_on_empty_ledger(self):
        result = _run("report", "sales")
        assert "No transactions to report." in result.output

    def test_invalid_tax_rate_rejected(self):
        result = _run("--tax-rate", "2", "report", "sales")
        assert result.exit_code == 2
        assert "between 0 and 1" in result.output


class TestRegister:

    def test_settings_read_from_environment(self):
        result = _run("register", input="5\n3\n0\n0\n", env={"POS_CASHIER_ID": "TILL7"})
        assert result.exit_code == 0
        assert "Current Cashier: TILL7" in result.output
        assert "Tax Rate: 8%" in result.output
        assert "Goodbye!" in result.output

    def test_cash_sale(self):
        keystrokes = [
            "3",     # Sales & Transactions
            "1",     # New Transaction
            "n",     # no registered customer
            "P001",
            "2",     # quantity
            "n",     # no manual discount
            "done",
            "1",     # Cash
            "5",     # amount paid
            "0",     # back
            "0",     # exit
        ]
        result = _run("register", input="\n".join(keystrokes) + "\n")
        assert result.exit_code == 0
        assert "Total: $3.37" in result.output
        assert "Change: $1.63" in result.output
        assert "Transaction completed successfully!" in result.output

    def test_unknown_product_reprompts(self):
        keystrokes = ["3", "1", "n", "P999", "done", "0", "0"]
        result = _run("register", input="\n".join(keystrokes) + "\n")
        assert result.exit_code == 0
        assert "Product not found!" in result.output
        assert "No items in transaction. Cancelling..." in result.output

    def test_domain_error_keeps_menu_running(self):
        keystrokes = ["1", "4", "P999", "5", "0", "0"]
        result = _run("register", input="\n".join(keystrokes) + "\n")
        assert result.exit_code == 0
        assert "Error: Product with ID 'P999' not found" in result.output
        assert "Goodbye!" in result.output

    def test_non_numeric_quantity_reprompts(self):
        keystrokes = [
            "3", "1", "n", "P001",
            "inf", "nan", "2",   # quantity: only the last is accepted
            "n", "done", "1", "5", "0", "0",
        ]
        result = _run("register", input="\n".join(keystrokes) + "\n")
        assert result.exit_code == 0
        assert "Error: 'inf' is not a valid number" in result.output
        assert "Error: 'nan' is not a valid number" in result.output
        assert "Transaction completed successfully!" in result.output

    def test_out_of_range_tax_rate_keeps_menu_running(self):
        keystrokes = ["5", "2", "2", "0", "0"]
        result = _run("register", input="\n".join(keystrokes) + "\n")
        assert result.exit_code == 0
        assert "between 0 and 1" in result.output
        assert "Goodbye!" in result.output
