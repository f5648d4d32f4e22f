from stridekit.providers.export.records import split_records


def test_split_simple_records():
    assert split_records("a,b,c\n1,2,3\n") == [["a", "b", "c"], ["1", "2", "3"]]


def test_quoted_newline_stays_in_field():
    text = 'id,description\n1,"line1\nline2"\n2,plain\n'

    records = split_records(text)

    assert records == [["id", "description"], ["1", "line1\nline2"], ["2", "plain"]]


def test_quoted_comma_stays_in_field():
    records = split_records('id,date\n1,"27 Oct 2019, 11:02:43"\n')

    assert records[1] == ["1", "27 Oct 2019, 11:02:43"]


def test_quotes_are_not_kept():
    records = split_records('a,b\n"x",y"z"\n')

    assert records[1] == ["x", "yz"]


def test_crlf_and_lone_cr_end_records():
    assert split_records("a,b\r\n1,2\r3,4") == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_fields_are_trimmed():
    assert split_records(" a , b \n 1 ,2\n") == [["a", "b"], ["1", "2"]]


def test_blank_and_single_field_records_are_dropped():
    text = "a,b\n\n\ntrailer\n1,2\n\n"

    assert split_records(text) == [["a", "b"], ["1", "2"]]


def test_last_record_without_newline():
    assert split_records("a,b\n1,2") == [["a", "b"], ["1", "2"]]


def test_empty_fields_are_kept():
    assert split_records("a,,c\n,,\n") == [["a", "", "c"], ["", "", ""]]


def test_empty_text():
    assert split_records("") == []
