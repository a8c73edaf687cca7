"""Integration tests for the web routes"""


def test_index_lists_calculators(client):
    """Test the index page links every calculator"""
    response = client.get("/")
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "Stamp Duty Calculator" in html
    assert 'href="/dividend-tax"' in html


def test_unknown_calculator_404(client):
    """Test unknown slugs are not found"""
    assert client.get("/not-a-calculator").status_code == 404
    assert client.get("/not-a-calculator/export.csv").status_code == 404


def test_calculator_defaults_on_get(client):
    """Test a plain GET shows the result for the default inputs"""
    html = client.get("/income-tax").get_data(as_text=True)

    assert "£7,486.00" in html
    assert "Frequently asked questions" in html
    assert "data:image/png;base64," in html


def test_calculator_get_query(client):
    """Test GET reads inputs from the query string"""
    html = client.get("/stamp-duty?price=300000&buyer=next_home").get_data(as_text=True)
    assert "£2,500.00" in html


def test_calculator_post(client):
    """Test POST runs the calculator on the submitted form"""
    response = client.post("/vat", data={"amount": "100", "rate": "20", "mode": "add"})
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "£120.00" in html
    assert "/vat/export.csv?amount=100&amp;rate=20&amp;mode=add" in html


def test_uncomputable_input_shows_placeholder(client):
    """Test garbage input is coerced and the placeholder shown"""
    response = client.post("/annuity", data={"pot": "abc", "rate": "5", "term": "20"})
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "above zero to see your income" in html
    assert "Download CSV" not in html


def test_export_csv(client):
    """Test the CSV download"""
    response = client.get("/vat/export.csv?amount=100&rate=20&mode=add")

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.data.startswith(b"\xef\xbb\xbf")
    assert '"Gross Amount (incl. VAT)","£120.00"' in response.data.decode("utf-8-sig")


def test_export_without_result_404(client):
    """Test exporting an uncomputable result is not found"""
    assert client.get("/annuity/export.csv?pot=0").status_code == 404
    assert client.get("/annuity/export.pdf?pot=0").status_code == 404


def test_export_pdf(client):
    """Test the PDF download"""
    response = client.get("/investment/export.pdf")

    assert response.status_code == 200
    assert response.mimetype == "application/pdf"
    assert response.data.startswith(b"%PDF")


def test_enormous_term_shows_placeholder(client):
    """Test a term of 1e308 years is handled without a server error"""
    response = client.post("/annuity", data={"pot": "1000", "rate": "5", "term": "1e308"})
    html = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "above zero to see your income" in html


def test_enormous_horizon_is_handled(client):
    """Test a billion-year projection returns a page rather than hanging"""
    response = client.get("/investment?initial=1000&monthly=100&rate=7&years=1e9")
    assert response.status_code == 200


def test_huge_salary_renders(client):
    """Test a salary near the float limit still charts"""
    response = client.get("/effective-tax-rate?income=1e300")
    assert response.status_code == 200


def test_new_calculator_pages(client):
    """Test the loan, CGT and savings pages render their defaults"""
    for slug in ("personal-loan", "car-loan", "mortgage-repayment",
                 "capital-gains-tax", "compound-interest", "savings-goal"):
        response = client.get(f"/{slug}")
        assert response.status_code == 200
    assert "£21,043.80" in client.get("/capital-gains-tax").get_data(as_text=True)
